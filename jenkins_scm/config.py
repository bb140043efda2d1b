#!/usr/bin/env python
# Copyright (C) 2015 Wayne Warren
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

# Manage jenkins_scm configuration sources, defaults, and access.

import configparser
from collections import defaultdict
import io
import logging
import os

import yaml

from jenkins_scm.errors import ScmBuilderConfigException

__all__ = [
    "ScmBuilderConfig",
    "load_plugins_info",
]

logger = logging.getLogger(__name__)

DEFAULT_CONF = """
[scm_builder]
allow_multiscm=False
allow_duplicates=False
"""

CONFIG_REQUIRED_MESSAGE = ("A valid configuration file is required. "
                           "No configuration file passed.")


def load_plugins_info(path):
    """Read a plugins-info YAML file, which must contain a list."""
    with io.open(path, 'r', encoding='utf-8') as yaml_file:
        plugins_info = yaml.safe_load(yaml_file)
    if not isinstance(plugins_info, list):
        raise ScmBuilderConfigException(
            "{0} must contain a Yaml list!".format(path))
    return plugins_info


class ScmBuilderConfig(object):

    def __init__(self, config_filename=None, config_file_required=False):
        """
        The ScmBuilderConfig class resolves the configuration of the
        jenkins-scm tool from its defaults and an optional INI file.

        :arg str config_filename: Name of configuration file on which to base
            this config object. When not given, ``jenkins_scm.ini`` is looked
            up beside the package, then in ``~/.config/jenkins_scm/`` and
            finally in ``/etc/jenkins_scm/``.
        :arg bool config_file_required: Whether failure to read the config
            file raises an exception or simply logs a warning indicating that
            default values are used.
        """

        config_parser = self._init_defaults()

        global_conf = '/etc/jenkins_scm/jenkins_scm.ini'
        user_conf = os.path.join(os.path.expanduser('~'), '.config',
                                 'jenkins_scm', 'jenkins_scm.ini')
        local_conf = os.path.join(os.path.dirname(__file__),
                                  'jenkins_scm.ini')
        if config_filename is not None:
            conf = config_filename
        elif os.path.isfile(local_conf):
            conf = local_conf
        elif os.path.isfile(user_conf):
            conf = user_conf
        else:
            conf = global_conf

        config_fp = None
        try:
            config_fp = self._read_config_file(conf)
        except ScmBuilderConfigException:
            if config_file_required:
                raise ScmBuilderConfigException(CONFIG_REQUIRED_MESSAGE)
            logger.warning("Config file, {0}, not found. Using "
                           "default config values.".format(conf))

        if config_fp is not None:
            with config_fp:
                try:
                    config_parser.read_file(config_fp)
                except configparser.Error as e:
                    raise ScmBuilderConfigException(
                        "Unable to parse config file {0}: {1}".format(conf,
                                                                      e))

        self.config_parser = config_parser
        self.config_filename = conf

        self.builder = defaultdict(None)
        self.yamlparser = defaultdict(None)

        self._setup()

    def _init_defaults(self):
        """ Initialize default configuration values using DEFAULT_CONF
        """
        config = configparser.ConfigParser()
        config.read_string(DEFAULT_CONF)
        return config

    def _read_config_file(self, config_filename):
        """ Given path to configuration file, open it for reading.
        """
        if os.path.isfile(config_filename):
            logger.debug("Reading config from {0}".format(config_filename))
            return io.open(config_filename, 'r', encoding='utf-8')
        raise ScmBuilderConfigException(
            "A valid configuration file is required. "
            "\n{0} is not valid.".format(config_filename))

    def _getboolean(self, option):
        try:
            return self.config_parser.getboolean('scm_builder', option)
        except ValueError:
            raise ScmBuilderConfigException(
                "Invalid boolean value for option '{0}' in section "
                "[scm_builder]".format(option))

    def _setup(self):
        config = self.config_parser

        self.builder['allow_multiscm'] = self._getboolean('allow_multiscm')
        self.yamlparser['allow_duplicates'] = self._getboolean(
            'allow_duplicates')

        plugins_info = None
        if config.has_option('scm_builder', 'plugins_info'):
            path = config.get('scm_builder', 'plugins_info')
            logger.debug("Loading plugins info from {0}".format(path))
            plugins_info = load_plugins_info(path)
        self.builder['plugins_info'] = plugins_info

    def validate(self):
        if (self.builder['plugins_info'] is not None and
                not isinstance(self.builder['plugins_info'], list)):
            raise ScmBuilderConfigException(
                "plugins_info must contain a list!")
