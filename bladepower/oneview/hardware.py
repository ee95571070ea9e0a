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

from bladepower.common import states


class ServerHardware(object):
    """Server hardware (blade) as described by OneView.

    :param uri: URI of the server hardware resource.
    :param name: display name.
    :param serial_number: serial number of the hardware.
    :param power_state: power state string as reported by OneView.
    :param client: a :class:`bladepower.oneview.client.OneViewClient` used
                   to reach the server hardware.
    """

    def __init__(self, uri='', name='', serial_number='', power_state='',
                 client=None):
        self.uri = uri
        self.name = name
        self.serial_number = serial_number
        self.power_state = power_state
        self.client = client

    def __repr__(self):
        return ('<ServerHardware uri=%(uri)r name=%(name)r '
                'powerState=%(state)r>' % {'uri': self.uri, 'name': self.name,
                                           'state': self.power_state})

    @classmethod
    def from_dict(cls, data, client=None):
        """Build a server hardware from a decoded OneView resource.

        :raises: ValueError if ``data`` is not a JSON object.
        """
        if not isinstance(data, dict):
            raise ValueError('expected a JSON object, got %s' %
                             type(data).__name__)
        return cls(uri=data.get('uri') or '',
                   name=data.get('name') or '',
                   serial_number=data.get('serialNumber') or '',
                   power_state=data.get('powerState') or '',
                   client=client)

    @property
    def power_state_uri(self):
        return self.uri + '/powerState'

    def classify_power_state(self):
        return states.PowerState.classify(self.power_state, name=self.name)
