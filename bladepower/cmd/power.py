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
Command line tool to query and change the power state of a OneView server
hardware.
"""

import sys

from oslo_config import cfg
from oslo_log import log

from bladepower.common import exception
from bladepower.common.i18n import _
from bladepower.common import states
from bladepower.conf import CONF
from bladepower.conf import opts
from bladepower.oneview import client
from bladepower.oneview import power

LOG = log.getLogger(__name__)


class PowerCommand(object):

    def _get_server_hardware(self):
        oneview_client = client.get_client()
        return oneview_client.get_server_hardware(
            CONF.command.server_hardware_uri)

    def status(self):
        state = power.get_power_state(self._get_server_hardware())
        print(state)
        return 0

    def _set(self, target):
        result = power.set_power_state(self._get_server_hardware(), target,
                                       timeout=CONF.command.timeout,
                                       wait_time=CONF.command.wait_time)
        print(result.value)
        return 0 if result is states.PowerTaskResult.COMPLETED else 1

    def on(self):
        return self._set(states.PowerState.ON)

    def off(self):
        return self._set(states.PowerState.OFF)


def _add_server_hardware_argument(parser):
    parser.add_argument(
        '--server-hardware-uri', metavar='<uri>', required=True,
        dest='server_hardware_uri',
        help=_("URI of the server hardware to act on, for example "
               "/rest/server-hardware/31393736-3831-4753-567h-30335837524E."))


def _add_wait_arguments(parser):
    parser.add_argument(
        '--timeout', metavar='<number>', dest='timeout', type=int,
        help=_("Maximum number of task status checks. Overrides "
               "[oneview]power_poll_max_attempts."))
    parser.add_argument(
        '--wait-time', metavar='<seconds>', dest='wait_time', type=int,
        help=_("Seconds between task status checks. Overrides "
               "[oneview]power_poll_interval."))


def add_command_parsers(subparsers):
    command_object = PowerCommand()

    parser = subparsers.add_parser(
        'status',
        help=_("Print the current power state of the server hardware."))
    _add_server_hardware_argument(parser)
    parser.set_defaults(func=command_object.status)

    parser = subparsers.add_parser(
        'on',
        help=_("Power the server hardware on and wait for the OneView task "
               "to complete. Returns 1 if it timed out."))
    _add_server_hardware_argument(parser)
    _add_wait_arguments(parser)
    parser.set_defaults(func=command_object.on)

    parser = subparsers.add_parser(
        'off',
        help=_("Power the server hardware off and wait for the OneView task "
               "to complete. Returns 1 if it timed out."))
    _add_server_hardware_argument(parser)
    _add_wait_arguments(parser)
    parser.set_defaults(func=command_object.off)


def parse_args(argv, default_config_files=None):
    command_opt = cfg.SubCommandOpt('command',
                                    title='Command',
                                    help=_('Available commands'),
                                    handler=add_command_parsers)
    CONF.register_cli_opt(command_opt)
    log.register_options(CONF)
    opts.update_opt_defaults()
    CONF(argv[1:], project='bladepower',
         default_config_files=default_config_files)
    log.setup(CONF, 'bladepower')


def main(argv=None):
    argv = sys.argv if argv is None else argv
    parse_args(argv)
    try:
        return CONF.command.func()
    except exception.BladePowerException as e:
        LOG.error("%(command)s failed: %(error)s",
                  {'command': CONF.command.name, 'error': e})
        return 1


if __name__ == '__main__':
    sys.exit(main())
