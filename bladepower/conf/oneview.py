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

from oslo_config import cfg

from bladepower.common.i18n import _

opts = [
    cfg.StrOpt('manager_url',
               help=_('URL where OneView is available.')),
    cfg.StrOpt('auth_token',
               secret=True,
               help=_('Pre-issued OneView session token sent in the "Auth" '
                      'header of every request. Session management is left '
                      'to the caller.')),
    cfg.IntOpt('api_version',
               default=800,
               min=1,
               help=_('OneView REST API version sent in the X-API-Version '
                      'header.')),
    cfg.BoolOpt('allow_insecure_connections',
                default=False,
                help=_('Option to allow insecure connection with OneView.')),
    cfg.StrOpt('tls_cacert_file',
               help=_('Path to CA certificate.')),
    cfg.IntOpt('request_timeout',
               default=60,
               min=1,
               help=_('Timeout (in seconds) of a single request to '
                      'OneView.')),
    cfg.IntOpt('power_poll_max_attempts',
               default=36,
               min=0,
               help=_('Maximum number of times the power change task is '
                      'checked before giving up on it.')),
    cfg.IntOpt('power_poll_interval',
               default=10,
               min=0,
               help=_('Time (in seconds) to wait between checks of the power '
                      'change task. Together with power_poll_max_attempts '
                      'it bounds how long a power change is waited for.')),
    cfg.BoolOpt('fail_on_timeout',
                default=False,
                help=_('Raise an error when a power change task does not '
                       'complete within power_poll_max_attempts checks. By '
                       'default a timeout is only logged and reported as a '
                       'result.')),
]


def register_opts(conf):
    conf.register_opts(opts, group='oneview')
