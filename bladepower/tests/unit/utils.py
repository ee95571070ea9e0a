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

"""Helpers building fake OneView resources for tests."""

from unittest import mock

from oslo_serialization import jsonutils

from bladepower.oneview import client
from bladepower.oneview import hardware

SERVER_HARDWARE_URI = '/rest/server-hardware/30303437-3034-4D32-3230'
TASK_URI = '/rest/tasks/A2F05F40-0E3C-4E7B-9D30-8C4E3A6E1A1D'


def get_test_server_hardware_dict(**kw):
    return {
        'uri': kw.get('uri', SERVER_HARDWARE_URI),
        'name': kw.get('name', 'Encl1, bay 3'),
        'serialNumber': kw.get('serial_number', 'CN7503FW9X'),
        'powerState': kw.get('power_state', 'On'),
    }


def get_test_task_dict(**kw):
    return {
        'type': 'TaskResourceV2',
        'uri': kw.get('uri', TASK_URI),
        'name': kw.get('name', 'Power off'),
        'owner': kw.get('owner', 'Administrator'),
        'taskState': kw.get('task_state', 'Running'),
        'taskStatus': kw.get('task_status', 'Powering off the server.'),
        'percentComplete': kw.get('percent_complete', 50),
        'computedPercentComplete': kw.get('computed_percent_complete', 50),
        'taskErrors': kw.get('task_errors', []),
    }


def get_test_task_json(**kw):
    return jsonutils.dumps(get_test_task_dict(**kw))


def get_test_client():
    """A OneView client mock with the real client's interface."""
    return mock.create_autospec(client.OneViewClient, instance=True)


def get_test_server_hardware(oneview_client=None, **kw):
    return hardware.ServerHardware.from_dict(
        get_test_server_hardware_dict(**kw),
        client=oneview_client or get_test_client())
