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

"""Handle on an asynchronous task tracked by OneView."""

from bladepower.common import states

# OneView JSON key -> (Task attribute, accepted types)
_FIELDS = {
    'uri': ('uri', (str,)),
    'name': ('name', (str,)),
    'owner': ('owner', (str,)),
    'taskState': ('task_state', (str,)),
    'taskStatus': ('task_status', (str,)),
    'percentComplete': ('percent_complete', (int, float)),
    'computedPercentComplete': ('computed_percent_complete',
                                (int, float)),
    'taskErrors': ('task_errors', (list,)),
}


class Task(object):
    """A reference to a OneView task.

    An empty uri means there is no task to track.
    """

    def __init__(self, uri='', name='', owner=''):
        self.uri = uri
        self.name = name
        self.owner = owner
        self.task_state = ''
        self.task_status = ''
        self.percent_complete = 0
        self.computed_percent_complete = 0
        self.task_errors = []

    def __repr__(self):
        return ('<Task uri=%(uri)r name=%(name)r state=%(state)r '
                '%(percent)s%%>' % {'uri': self.uri, 'name': self.name,
                                    'state': self.task_state,
                                    'percent': self.computed_percent_complete})

    def update(self, data):
        """Update the task in place from a decoded OneView task resource.

        Keys missing from data leave the matching attribute untouched.

        :param data: a dict decoded from a OneView task resource.
        :raises: ValueError if data is not a JSON object or a field has an
                 unexpected type. The task is left untouched then.
        """
        if not isinstance(data, dict):
            raise ValueError('expected a JSON object, got %s' %
                             type(data).__name__)
        changes = {}
        for key, (attr, types) in _FIELDS.items():
            value = data.get(key)
            if value is None:
                continue
            # bool is an int subclass but never a valid percentage
            if not isinstance(value, types) or isinstance(value, bool):
                raise ValueError('unexpected %(type)s value for %(key)s' %
                                 {'type': type(value).__name__, 'key': key})
            changes[attr] = value
        for attr, value in changes.items():
            setattr(self, attr, value)
        return self

    def copy(self):
        task = Task()
        task.__dict__.update(self.__dict__)
        task.task_errors = list(self.task_errors)
        return task

    @property
    def exists(self):
        return bool(self.uri)

    @property
    def is_completed(self):
        return self.exists and states.is_task_completed(self.task_state)

    @property
    def is_failed(self):
        return self.exists and states.is_task_failed(self.task_state)

    def error_summary(self):
        """Human readable summary of the errors reported by the task."""
        messages = [err.get('message') for err in self.task_errors
                    if isinstance(err, dict) and err.get('message')]
        if messages:
            return '; '.join(messages)
        return self.task_status or self.task_state
