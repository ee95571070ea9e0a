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
Constants for server hardware power states and remote task lifecycle.

Power state and power control values are the literal strings used by the
OneView REST API. Values reported by the remote system are free-form, so
every comparison against them is case-insensitive.
"""

import enum

from oslo_log import log as logging

LOG = logging.getLogger(__name__)


def _normalize(value):
    return value.upper() if isinstance(value, str) else None


class PowerState(enum.Enum):
    """Observed power state of a server hardware."""

    ON = 'On'
    OFF = 'Off'
    UNKNOWN = 'UNKNOWN'

    def __str__(self):
        return self.value

    def equals(self, value):
        """Compare with a power state string reported by the remote API."""
        return _normalize(value) == self.value.upper()

    @classmethod
    def lookup(cls, value):
        """Find the power state matching ``value``.

        :param value: a power state string reported by the remote API.
        :returns: a :class:`PowerState`, or None when nothing matches.
        """
        return _POWER_STATE_MAP.get(_normalize(value))

    @classmethod
    def classify(cls, value, name=None):
        """Classify a remote power state string.

        Only ``On`` and ``Off`` are recognized. Anything else, including a
        missing value, is classified as ``UNKNOWN``.

        :param value: a power state string reported by the remote API.
        :param name: name of the server hardware, used for logging only.
        :returns: a :class:`PowerState`.
        """
        state = cls.lookup(value)
        if state is None:
            LOG.warning("Unknown power state %(state)s detected for "
                        "%(name)s.", {'state': value, 'name': name})
            return cls.UNKNOWN
        return state


_POWER_STATE_MAP = {
    PowerState.ON.value.upper(): PowerState.ON,
    PowerState.OFF.value.upper(): PowerState.OFF,
}


class PowerControl(enum.Enum):
    """How a power state transition is requested."""

    COLD_BOOT = 'ColdBoot'
    """Removes power immediately, restarts about six seconds later."""

    MOMENTARY_PRESS = 'MomentaryPress'
    """Power on, or a normal (soft) power off, depending on powerState."""

    RESET = 'Reset'
    """Orderly reset of the server hardware."""

    def __str__(self):
        return self.value


TASK_COMPLETED = 'Completed'
""" Remote task finished successfully. """

TASK_FAILED_STATES = frozenset(['ERROR', 'TERMINATED', 'KILLED'])
""" Remote task lifecycle states that will never reach completion. """


def is_task_completed(task_state):
    return _normalize(task_state) == TASK_COMPLETED.upper()


def is_task_failed(task_state):
    return _normalize(task_state) in TASK_FAILED_STATES


class ExecutorPhase(enum.Enum):
    """Phases a power executor goes through during one attempt."""

    IDLE = 'idle'
    SUBMITTING = 'submitting'
    POLLING = 'polling'
    DONE = 'done'
    TIMED_OUT = 'timed out'
    CANCELLED = 'cancelled'
    FAILED = 'failed'


class PowerTaskResult(enum.Enum):
    """Outcome of a power executor run that did not raise."""

    COMPLETED = 'completed'
    TIMED_OUT = 'timed out'
    CANCELLED = 'cancelled'
