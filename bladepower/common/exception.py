#    Licensed under the Apache License, Version 2.0 (the "License"); you may
#    not use this file except in compliance with the License. You may obtain
#    a copy of the License at
#
#         http://www.apache.org/licenses/LICENSE-2.0
#
#    Unless required by applicable law or agreed to in writing, software
#    distributed under the License is distributed on an "AS IS" BASIS, WITHOUT
#    WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied. See the
#    License for the specific language governing permissions and limitations
#    under the License.

"""bladepower specific exceptions list."""

from oslo_log import log as logging
from oslo_utils import excutils

from bladepower.common.i18n import _
from bladepower.conf import CONF

LOG = logging.getLogger(__name__)


class BladePowerException(Exception):
    """Base bladepower Exception

    To correctly use this class, inherit from it and define
    a '_msg_fmt' property. That _msg_fmt will get printf'd
    with the keyword arguments provided to the constructor.

    If you need to access the message from an exception you should use
    str(exc)

    """

    _msg_fmt = _("An unknown exception occurred.")

    def __init__(self, message=None, **kwargs):
        self.kwargs = kwargs

        if not message:
            try:
                message = self._msg_fmt % kwargs

            except Exception:
                with excutils.save_and_reraise_exception() as ctxt:
                    # kwargs doesn't match a variable in the message
                    # log the issue and the kwargs
                    prs = ', '.join('%s=%s' % pair for pair in kwargs.items())
                    LOG.exception('Exception in string format operation '
                                  '(arguments %s)', prs)
                    if not CONF.errors.fatal_exception_format_errors:
                        # at least get the core message out if something
                        # happened
                        message = self._msg_fmt
                        ctxt.reraise = False

        super(BladePowerException, self).__init__(message)


class Invalid(BladePowerException):
    _msg_fmt = _("Unacceptable parameters.")


class InvalidParameterValue(Invalid):
    _msg_fmt = "%(err)s"


class MissingHardwareReference(Invalid):
    _msg_fmt = _("Can not manage power of server hardware %(name)s: "
                 "no server hardware URI is set.")


class OneViewError(BladePowerException):
    _msg_fmt = _("OneView exception occurred. Error: %(error)s")


class OneViewTransportError(OneViewError):
    _msg_fmt = _("%(method)s request to %(uri)s failed. Error: %(error)s")


class OneViewDecodeError(OneViewError):
    _msg_fmt = _("Unable to decode response from %(uri)s. Error: %(error)s")


class PowerStateFailure(BladePowerException):
    _msg_fmt = _("Failed to set server hardware power state to %(pstate)s. "
                 "Error: %(error)s")


class PowerStateTimeout(PowerStateFailure):
    _msg_fmt = _("Timed out after %(attempts)s attempts waiting for server "
                 "hardware %(name)s to reach power state %(pstate)s.")
