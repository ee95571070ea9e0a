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
Power management of OneView server hardware.

A power change is submitted to OneView on a worker thread while the caller
polls the OneView task created for it. Both sides share one
:class:`PowerTask`, whose fields are only touched while holding its
condition variable. Remote calls are always made without holding it.
"""

import collections
import functools
import threading

import futurist
from oslo_log import log as logging
from oslo_utils import excutils

from bladepower.common import exception
from bladepower.common.i18n import _
from bladepower.common import states
from bladepower.conf import CONF
from bladepower.oneview import client
from bladepower.oneview import task as task_utils

LOG = logging.getLogger(__name__)

POWER_CONTROL = states.PowerControl.MOMENTARY_PRESS

SUPPORTED_TARGETS = (states.PowerState.ON, states.PowerState.OFF)

PowerTaskStatus = collections.namedtuple(
    'PowerTaskStatus', ['state', 'done', 'failure', 'cancelled', 'task'])


def _decode_task(uri, data, task):
    try:
        return task.update(client.decode(uri, data))
    except ValueError as e:
        raise exception.OneViewDecodeError(uri=uri, error=e)


class PowerTask(object):
    """Provides the execution status of a power change.

    :param server_hardware: a
        :class:`bladepower.oneview.hardware.ServerHardware`.
    :param timeout: maximum number of task status checks. Defaults to
        ``[oneview]power_poll_max_attempts``.
    :param wait_time: seconds between task status checks. Defaults to
        ``[oneview]power_poll_interval``.
    """

    def __init__(self, server_hardware, timeout=None, wait_time=None):
        self.server_hardware = server_hardware
        self.timeout = (CONF.oneview.power_poll_max_attempts
                        if timeout is None else timeout)
        self.wait_time = (CONF.oneview.power_poll_interval
                          if wait_time is None else wait_time)
        self.state = states.PowerState.UNKNOWN
        self.done = False
        self.failure = None
        self.cancelled = False
        self.current_task = task_utils.Task()
        self._attempt = 0
        self._cond = threading.Condition()

    def _is_current(self, attempt):
        return attempt is None or attempt == self._attempt

    def reset_task(self):
        """Reset the power task before a new attempt.

        :returns: the number of the new attempt. Updates made on behalf of
                  any earlier attempt are discarded from now on.
        """
        with self._cond:
            self._attempt += 1
            self.state = states.PowerState.UNKNOWN
            self.done = False
            self.failure = None
            self.cancelled = False
            self.current_task = task_utils.Task()
            return self._attempt

    def snapshot(self):
        """Return a consistent copy of the power task status."""
        with self._cond:
            return PowerTaskStatus(self.state, self.done, self.failure,
                                   self.cancelled, self.current_task.copy())

    def mark_done(self, failure=None, attempt=None):
        """Mark the attempt as finished, recording ``failure`` if any."""
        with self._cond:
            if not self._is_current(attempt):
                return
            self.done = True
            if failure is not None and self.failure is None:
                self.failure = failure
            self._cond.notify_all()

    def cancel(self):
        """Ask the current attempt to stop waiting."""
        with self._cond:
            self.cancelled = True
            self._cond.notify_all()

    def wait(self, timeout):
        """Sleep up to ``timeout`` seconds, waking early when done.

        :returns: True if the attempt is done or cancelled.
        """
        with self._cond:
            return self._cond.wait_for(lambda: self.done or self.cancelled,
                                       timeout=timeout)

    def get_current_power_state(self, attempt=None):
        """Get the current power state of the server hardware.

        :param attempt: attempt the query is made for, None for the current
                        one.
        :returns: a :class:`bladepower.common.states.PowerState`.
        :raises: MissingHardwareReference if the server hardware has no URI.
        :raises: OneViewTransportError, OneViewDecodeError
        """
        with self._cond:
            server_hardware = self.server_hardware
            if not server_hardware.uri:
                self.state = states.PowerState.UNKNOWN
                raise exception.MissingHardwareReference(
                    name=server_hardware.name)

        latest = server_hardware.client.get_server_hardware(
            server_hardware.uri)
        LOG.debug("Fetched server hardware %s", latest)
        state = latest.classify_power_state()

        with self._cond:
            if self._is_current(attempt):
                self.state = state
                self.server_hardware = latest
        return state

    def submit_power_state(self, target, attempt=None):
        """Submit the desired power state to OneView.

        Nothing is raised: any failure is logged and recorded on the power
        task, which is then marked as done.

        :param target: the desired
            :class:`bladepower.common.states.PowerState`.
        :param attempt: attempt the submission belongs to, None for the
                        current one.
        """
        with self._cond:
            if attempt is None:
                attempt = self._attempt

        try:
            current = self.get_current_power_state(attempt)
        except exception.BladePowerException as e:
            LOG.error("Error getting current power state: %s", e)
            self.mark_done(failure=e, attempt=attempt)
            return

        if current is target:
            LOG.info("Desired power state already set -> %s", current)
            self.mark_done(attempt=attempt)
            return

        server_hardware = self.server_hardware
        LOG.info("Powering %(state)s server hardware %(name)s for "
                 "%(serial)s.",
                 {'state': target, 'name': server_hardware.name,
                  'serial': server_hardware.serial_number})
        uri = server_hardware.power_state_uri
        body = {'powerState': str(target), 'powerControl': str(POWER_CONTROL)}
        try:
            data = server_hardware.client.rest_call(client.PUT, uri, body)
        except exception.OneViewError as e:
            LOG.error("Error with power state request: %s", e)
            self.mark_done(failure=e, attempt=attempt)
            return

        try:
            submitted = _decode_task(uri, data, task_utils.Task())
        except exception.OneViewDecodeError as e:
            LOG.error("Error decoding power state response: %s", e)
            self.mark_done(failure=e, attempt=attempt)
            return

        LOG.debug("Power state change submitted, task %s", submitted)
        with self._cond:
            if self._is_current(attempt):
                self.current_task = submitted

    def get_current_task_status(self, attempt=None):
        """Refresh the task tracking the power change.

        Does nothing until a task has been recorded.

        :returns: a copy of the refreshed task, or None.
        :raises: OneViewTransportError, OneViewDecodeError
        """
        with self._cond:
            current = self.current_task.copy()
            oneview_client = self.server_hardware.client

        if not current.exists:
            LOG.debug("Unable to get current task, no URI found")
            return None

        data = oneview_client.rest_call(client.GET, current.uri)
        refreshed = _decode_task(current.uri, data, current)

        with self._cond:
            if (self._is_current(attempt)
                    and self.current_task.uri == refreshed.uri):
                self.current_task = refreshed
        return refreshed.copy()


class PowerExecutor(object):
    """Submit a desired power state and wait for OneView to apply it.

    :param power_task: the :class:`PowerTask` to drive.
    :param fail_on_timeout: raise PowerStateTimeout instead of returning
        ``TIMED_OUT``. Defaults to ``[oneview]fail_on_timeout``.
    :param executor: a futurist executor running the submission. A single
        worker pool is created when not given.
    """

    def __init__(self, power_task, fail_on_timeout=None, executor=None):
        self.power_task = power_task
        self.fail_on_timeout = (CONF.oneview.fail_on_timeout
                                if fail_on_timeout is None
                                else fail_on_timeout)
        self._own_executor = executor is None
        self._executor = executor or futurist.ThreadPoolExecutor(
            max_workers=1)
        self.phase = states.ExecutorPhase.IDLE

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        self.close()

    def close(self, wait=True):
        """Release the worker pool created by this executor.

        Must be called once the executor is no longer needed, unless it
        is used as a context manager. An executor passed in by the caller
        is left running.
        """
        if self._own_executor:
            self._executor.shutdown(wait=wait)

    def cancel(self):
        """Stop waiting for the power change. Safe from any thread."""
        self.power_task.cancel()

    def _on_submitted(self, attempt, future):
        if future.cancelled():
            return
        exc = future.exception()
        if exc is not None:
            LOG.error("Unexpected error submitting power state: %s", exc)
            self.power_task.mark_done(failure=exc, attempt=attempt)

    def execute(self, target):
        """Set the power state of the server hardware and wait for it.

        :param target: PowerState.ON or PowerState.OFF.
        :returns: a :class:`bladepower.common.states.PowerTaskResult`.
        :raises: InvalidParameterValue for an unsupported target.
        :raises: PowerStateFailure if the power change could not be
                 submitted or the OneView task failed.
        :raises: PowerStateTimeout on timeout when fail_on_timeout is set.
        :raises: OneViewTransportError, OneViewDecodeError if checking the
                 task status fails.
        """
        if target not in SUPPORTED_TARGETS:
            raise exception.InvalidParameterValue(
                err=_("Unsupported power state %s requested.") % target)

        power_task = self.power_task
        attempt = power_task.reset_task()
        self.phase = states.ExecutorPhase.IDLE

        future = self._executor.submit(power_task.submit_power_state,
                                       target, attempt)
        future.add_done_callback(functools.partial(self._on_submitted,
                                                   attempt))
        self.phase = states.ExecutorPhase.SUBMITTING

        try:
            return self._poll(target, attempt)
        except Exception:
            with excutils.save_and_reraise_exception():
                if self.phase is states.ExecutorPhase.POLLING:
                    self.phase = states.ExecutorPhase.FAILED

    def _poll(self, target, attempt):
        power_task = self.power_task
        name = power_task.server_hardware.name
        self.phase = states.ExecutorPhase.POLLING

        checks = 0
        status = power_task.snapshot()
        while (not status.done and not status.cancelled
               and checks < power_task.timeout):
            current = power_task.get_current_task_status(attempt)
            if current is not None and current.is_completed:
                power_task.mark_done(attempt=attempt)
            elif current is not None and current.is_failed:
                power_task.mark_done(
                    failure=exception.PowerStateFailure(
                        pstate=target, error=current.error_summary()),
                    attempt=attempt)

            if current is not None:
                LOG.debug("Waiting to set power state %(state)s for server "
                          "hardware %(name)s",
                          {'state': target, 'name': name})
                LOG.info("Working on power state, %(percent)d%%, "
                         "%(status)s.",
                         {'percent': current.computed_percent_complete,
                          'status': current.task_status})
            else:
                LOG.info("Working on power state.")

            checks += 1
            power_task.wait(power_task.wait_time)
            status = power_task.snapshot()

        if status.failure is not None:
            self.phase = states.ExecutorPhase.FAILED
            if isinstance(status.failure, exception.PowerStateFailure):
                raise status.failure
            raise exception.PowerStateFailure(pstate=target,
                                              error=status.failure)

        if status.done:
            self.phase = states.ExecutorPhase.DONE
            result = states.PowerTaskResult.COMPLETED
        elif status.cancelled:
            self.phase = states.ExecutorPhase.CANCELLED
            LOG.warning("Power %(state)s cancelled for %(name)s.",
                        {'state': target, 'name': name})
            result = states.PowerTaskResult.CANCELLED
        else:
            self.phase = states.ExecutorPhase.TIMED_OUT
            LOG.warning("Power %(state)s state timed out for %(name)s.",
                        {'state': target, 'name': name})
            if self.fail_on_timeout:
                raise exception.PowerStateTimeout(attempts=checks, name=name,
                                                  pstate=target)
            result = states.PowerTaskResult.TIMED_OUT

        LOG.info("Power task execution completed")
        return result


def get_power_state(server_hardware):
    """Get the current power state of a server hardware.

    :returns: a :class:`bladepower.common.states.PowerState`.
    :raises: MissingHardwareReference, OneViewTransportError,
             OneViewDecodeError
    """
    return PowerTask(server_hardware).get_current_power_state()


def set_power_state(server_hardware, target, timeout=None, wait_time=None):
    """Set the power state of a server hardware and wait for it.

    See :meth:`PowerExecutor.execute` for the results and errors.
    """
    power_task = PowerTask(server_hardware, timeout=timeout,
                           wait_time=wait_time)
    with PowerExecutor(power_task) as executor:
        return executor.execute(target)
