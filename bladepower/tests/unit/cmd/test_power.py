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

from unittest import mock

import fixtures
from oslo_log import log

from bladepower.cmd import power as power_cmd
from bladepower.common import exception
from bladepower.common import states
from bladepower.conf import CONF
from bladepower.oneview import client
from bladepower.oneview import power
from bladepower.tests import base
from bladepower.tests.unit import utils


@mock.patch.object(client, 'get_client', autospec=True)
class PowerCommandTestCase(base.TestCase):

    def setUp(self):
        super(PowerCommandTestCase, self).setUp()
        self.conf = self.useFixture(
            fixtures.MockPatchObject(power_cmd, 'CONF')).mock
        self.conf.command.server_hardware_uri = utils.SERVER_HARDWARE_URI
        self.conf.command.timeout = 2
        self.conf.command.wait_time = 0
        self.client = utils.get_test_client()
        self.server_hardware = utils.get_test_server_hardware(self.client)
        self.client.get_server_hardware.return_value = self.server_hardware
        self.command = power_cmd.PowerCommand()

    @mock.patch.object(power, 'get_power_state', autospec=True)
    def test_status(self, mock_get, mock_get_client):
        mock_get_client.return_value = self.client
        mock_get.return_value = states.PowerState.ON

        self.assertEqual(0, self.command.status())

        self.client.get_server_hardware.assert_called_once_with(
            utils.SERVER_HARDWARE_URI)
        mock_get.assert_called_once_with(self.server_hardware)

    @mock.patch.object(power, 'set_power_state', autospec=True)
    def test_on(self, mock_set, mock_get_client):
        mock_get_client.return_value = self.client
        mock_set.return_value = states.PowerTaskResult.COMPLETED

        self.assertEqual(0, self.command.on())

        mock_set.assert_called_once_with(self.server_hardware,
                                         states.PowerState.ON,
                                         timeout=2, wait_time=0)

    @mock.patch.object(power, 'set_power_state', autospec=True)
    def test_off_timed_out(self, mock_set, mock_get_client):
        mock_get_client.return_value = self.client
        mock_set.return_value = states.PowerTaskResult.TIMED_OUT

        self.assertEqual(1, self.command.off())

        mock_set.assert_called_once_with(self.server_hardware,
                                         states.PowerState.OFF,
                                         timeout=2, wait_time=0)


class MainTestCase(base.TestCase):

    @mock.patch.object(power_cmd, 'CONF')
    @mock.patch.object(power_cmd, 'parse_args', autospec=True)
    def test_main(self, mock_parse, mock_conf):
        mock_conf.command.func.return_value = 0

        self.assertEqual(0, power_cmd.main(['bladepower-power', 'status']))

        mock_parse.assert_called_once_with(['bladepower-power', 'status'])

    @mock.patch.object(power_cmd.LOG, 'error', autospec=True)
    @mock.patch.object(power_cmd, 'CONF')
    @mock.patch.object(power_cmd, 'parse_args', autospec=True)
    def test_main_failure(self, mock_parse, mock_conf, mock_log):
        mock_conf.command.func.side_effect = exception.PowerStateFailure(
            pstate='On', error='boom')

        self.assertEqual(1, power_cmd.main(['bladepower-power', 'on']))
        self.assertTrue(mock_log.called)

    @mock.patch.object(log, 'setup', autospec=True)
    def test_parse_args(self, mock_setup):
        power_cmd.parse_args(['bladepower-power', 'off',
                              '--server-hardware-uri',
                              utils.SERVER_HARDWARE_URI,
                              '--timeout', '5'],
                             default_config_files=[])

        self.assertEqual('off', CONF.command.name)
        self.assertEqual(utils.SERVER_HARDWARE_URI,
                         CONF.command.server_hardware_uri)
        self.assertEqual(5, CONF.command.timeout)
        self.assertIsNone(CONF.command.wait_time)
        mock_setup.assert_called_once_with(CONF, 'bladepower')

    @mock.patch.object(log, 'setup', autospec=True)
    def test_parse_args_status(self, mock_setup):
        power_cmd.parse_args(['bladepower-power', 'status',
                              '--server-hardware-uri',
                              utils.SERVER_HARDWARE_URI],
                             default_config_files=[])

        self.assertEqual('status', CONF.command.name)
        self.assertEqual(utils.SERVER_HARDWARE_URI,
                         CONF.command.server_hardware_uri)
        self.assertEqual(power_cmd.PowerCommand.status.__name__,
                         CONF.command.func.__name__)
