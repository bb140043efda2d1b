#!/usr/bin/env python
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

# Manage Jenkins plugin information used for version gating.

import logging
import re

from packaging import version as pkg_version

from jenkins_scm.errors import JenkinsScmException

__all__ = [
    "PluginRegistry"
]

logger = logging.getLogger(__name__)


def parse_version(version_string):
    """Parse a Jenkins plugin version string.

    Jenkins plugins do not always follow PEP 440, so when the full string
    cannot be parsed the leading dotted numeric part is used instead.
    Returns None if no usable version can be found.
    """
    if version_string is None:
        return None
    try:
        return pkg_version.Version(str(version_string))
    except pkg_version.InvalidVersion:
        match = re.match(r'\d+(\.\d+)*', str(version_string))
        if match is None:
            logger.warning("Unable to parse plugin version '%s'",
                           version_string)
            return None
        logger.debug("Using '%s' for non standard plugin version '%s'",
                     match.group(0), version_string)
        return pkg_version.Version(match.group(0))


class PluginRegistry(object):
    """Version lookup backed by a list of plugin information dictionaries.

    :arg list plugins_list: plugin information as returned by the Jenkins
        plugin manager API (``shortName``, ``longName`` and ``version``
        keys), or as read from a plugins-info YAML file. ``None`` means no
        information is available and every lookup returns no version.
    """

    def __init__(self, plugins_list=None):
        if plugins_list is None:
            self.plugins_dict = {}
        else:
            if not isinstance(plugins_list, list):
                raise JenkinsScmException(
                    "plugins_info must contain a list!")
            self.plugins_dict = self._get_plugins_info_dict(plugins_list)

    @staticmethod
    def _get_plugins_info_dict(plugins_list):
        def mutate_plugin_info(plugin_info):
            """
            We perform mutations on a single member of plugin_info here, then
            return a dictionary with the longName and shortName of the plugin
            mapped to its plugin info dictionary.
            """
            version = plugin_info.get('version')
            if version is not None:
                plugin_info['version'] = re.sub(r'(.*)-(?:SNAPSHOT|BETA).*',
                                                r'\g<1>.preview',
                                                str(version))

            aliases = []
            for key in ['longName', 'shortName']:
                value = plugin_info.get(key, None)
                if value is not None:
                    aliases.append(value)

            plugin_info_dict = {}
            for name in aliases:
                plugin_info_dict[name] = plugin_info

            return plugin_info_dict

        list_of_dicts = [mutate_plugin_info(dict(v)) for v in plugins_list]

        plugins_info_dict = {}
        for d in list_of_dicts:
            plugins_info_dict.update(d)

        return plugins_info_dict

    def get_plugin_info(self, plugin_name):
        """Return the information dictionary known for a plugin.

        :arg string plugin_name: Either the shortName or longName of a plugin
          as seen in a query that looks like:
          ``http://<jenkins-hostname>/pluginManager/api/json?pretty&depth=2``

        An empty dictionary is returned for unknown plugins.
        """
        return self.plugins_dict.get(plugin_name, {})

    def get_plugin_version(self, plugin_name):
        """Return the installed version of a plugin, or None if unknown."""
        info = self.get_plugin_info(plugin_name)
        return parse_version(info.get('version'))
