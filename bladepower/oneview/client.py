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

"""
OneView REST API client.

Only the calls needed to manage server hardware power are provided. The
session token, when any, is issued elsewhere and passed in verbatim.
"""

from urllib import parse

from oslo_log import log as logging
from oslo_serialization import jsonutils
from oslo_utils import strutils
import requests
from requests import exceptions as requests_exceptions

from bladepower.common import exception
from bladepower.common.i18n import _
from bladepower.conf import CONF
from bladepower.oneview import hardware

LOG = logging.getLogger(__name__)

GET = 'GET'
PUT = 'PUT'


def prepare_manager_url(manager_url):
    """Normalize the OneView address into a base URL.

    An address given without a scheme is reached over https.
    """
    manager_url = (manager_url or '').strip()
    if not manager_url:
        raise exception.InvalidParameterValue(
            err=_("OneView manager URL is missing, set [oneview]manager_url."))
    if '://' not in manager_url:
        manager_url = 'https://' + manager_url
    return manager_url.rstrip('/')


def decode(uri, data):
    """Decode a OneView JSON response.

    :param uri: the URI the response came from, used for error reporting.
    :param data: raw response body.
    :raises: OneViewDecodeError if the body is not valid JSON.
    """
    try:
        return jsonutils.loads(data)
    except (TypeError, ValueError) as e:
        raise exception.OneViewDecodeError(uri=uri, error=e)


class OneViewClient(object):
    """Client for the OneView REST API.

    :param manager_url: address of the OneView appliance.
    :param auth_token: a pre-issued session token, or None.
    :param api_version: value of the X-API-Version header.
    :param verify: TLS verification, a CA bundle path or a boolean.
    :param timeout: timeout (in seconds) of a single request.
    """

    def __init__(self, manager_url, auth_token=None, api_version=800,
                 verify=True, timeout=60):
        self.base_url = prepare_manager_url(manager_url)
        self.verify = verify
        self.timeout = timeout
        self.session = requests.Session()
        self.session.headers.update({'Content-Type': 'application/json',
                                     'X-API-Version': str(api_version)})
        if auth_token:
            self.session.headers['Auth'] = auth_token

    def _get_url(self, uri):
        return parse.urljoin(self.base_url + '/', uri)

    def rest_call(self, method, uri, body=None):
        """Perform a REST call against OneView.

        :param method: HTTP method, GET or PUT.
        :param uri: resource URI, absolute or relative to the manager URL.
        :param body: an object to be sent JSON encoded, or None.
        :returns: the raw response body.
        :raises: OneViewTransportError if the request fails or OneView
                 answers with an error status.
        """
        url = self._get_url(uri)
        data = None if body is None else jsonutils.dumps(body)
        LOG.debug("REST %(method)s %(url)s body: %(body)s",
                  {'method': method, 'url': url,
                   'body': strutils.mask_password(data) if data else data})
        try:
            response = self.session.request(method, url, data=data,
                                            verify=self.verify,
                                            timeout=self.timeout)
            response.raise_for_status()
        except requests_exceptions.RequestException as e:
            raise exception.OneViewTransportError(method=method, uri=uri,
                                                  error=e)

        LOG.debug("Call to %(url)s got response: %(response)s",
                  {'url': url, 'response': response.text})
        return response.text

    def get_server_hardware(self, uri):
        """Look up a server hardware.

        :param uri: URI of the server hardware.
        :returns: a :class:`bladepower.oneview.hardware.ServerHardware`
                  bound to this client.
        :raises: OneViewTransportError, OneViewDecodeError
        """
        data = decode(uri, self.rest_call(GET, uri))
        try:
            return hardware.ServerHardware.from_dict(data, client=self)
        except ValueError as e:
            raise exception.OneViewDecodeError(uri=uri, error=e)


def get_client():
    """Generate a OneView client from configuration.

    :returns: an instance of :class:`OneViewClient`.
    :raises: InvalidParameterValue if the manager URL is missing.
    :raises: OneViewError if a secure connection is requested without a CA
             certificate.
    """
    insecure = CONF.oneview.allow_insecure_connections
    ssl_certificate = CONF.oneview.tls_cacert_file

    if not (insecure or ssl_certificate):
        msg = _("TLS CA certificate to connect with OneView is missing.")
        raise exception.OneViewError(error=msg)

    if insecure and ssl_certificate:
        LOG.warning("Performing an insecure connection with OneView, the CA "
                    "certificate file: %s will be ignored.", ssl_certificate)
        ssl_certificate = None

    return OneViewClient(CONF.oneview.manager_url,
                         auth_token=CONF.oneview.auth_token,
                         api_version=CONF.oneview.api_version,
                         verify=ssl_certificate or False,
                         timeout=CONF.oneview.request_timeout)
