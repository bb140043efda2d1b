# Copyright (C) 2015 OpenStack, LLC.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
# http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS, WITHOUT
# WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied. See the
# License for the specific language governing permissions and limitations
# under the License.

"""
Plugin version gating.

Some SCM plugins changed their configuration schema between releases. The
schema variant to emit is chosen from the installed plugin version:

* ``LEGACY`` when the installed version is older than the gate threshold,
* ``CURRENT`` otherwise, and also when the version is unknown.

An unknown version selects the current schema, assuming that the latest
plugin is installed.
"""

import logging

from packaging import version as pkg_version

__all__ = [
    "LEGACY",
    "CURRENT",
    "VERSION_GATES",
    "resolve_variant",
    "resolve_gate",
]

logger = logging.getLogger(__name__)

LEGACY = 'legacy'
CURRENT = 'current'

#: scm kind -> (plugin name, first version using the current schema)
VERSION_GATES = {
    'git': ('git', '2.0.0'),
    'hg': ('mercurial', '1.50.1'),
}

DEPRECATION_MESSAGE = ("support for {plugin} plugin versions older than "
                       "{threshold} is deprecated")


def _as_version(value):
    if value is None or isinstance(value, pkg_version.Version):
        return value
    return pkg_version.Version(str(value))


def resolve_variant(plugin_name, installed, threshold, notify=None):
    """Select the schema variant for a plugin.

    :arg str plugin_name: name of the plugin, used in the deprecation notice
    :arg installed: installed version (Version, str or None if unknown)
    :arg threshold: first version using the current schema
    :arg callable notify: receives the deprecation message when the legacy
        variant is selected (default: log a warning)
    :returns: ``LEGACY`` or ``CURRENT``
    """
    installed = _as_version(installed)
    threshold = _as_version(threshold)

    if installed is None:
        logger.debug("No version known for plugin '%s', assuming %s or "
                     "later", plugin_name, threshold)
        return CURRENT

    if installed < threshold:
        if notify is None:
            notify = logger.warning
        notify(DEPRECATION_MESSAGE.format(plugin=plugin_name,
                                          threshold=threshold))
        return LEGACY

    return CURRENT


def resolve_gate(kind, registry, notify=None):
    """Resolve the schema variant for an scm kind listed in VERSION_GATES.

    :arg str kind: scm kind, e.g. ``git``
    :arg registry: version lookup providing ``get_plugin_version(name)``
    """
    plugin_name, threshold = VERSION_GATES[kind]
    installed = None
    if registry is not None:
        installed = registry.get_plugin_version(plugin_name)
    return resolve_variant(plugin_name, installed, threshold, notify)
