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

# Read job definitions carrying scm components.

import copy
import io
import logging
import os

import yaml

from jenkins_scm.errors import JenkinsScmException
from jenkins_scm.errors import YAMLFormatError

__all__ = [
    "YamlParser"
]

logger = logging.getLogger(__name__)


class YamlParser(object):
    """Collect ``job`` and ``defaults`` entries from YAML files.

    :arg config: a :py:class:`jenkins_scm.config.ScmBuilderConfig`, used for
        the ``allow_duplicates`` setting (optional)
    """

    def __init__(self, config=None):
        self.data = {}
        self.jobs = []
        self.allow_duplicates = False
        if config is not None:
            self.allow_duplicates = config.yamlparser['allow_duplicates']

    def load_files(self, fn):
        files_to_process = []
        for path in fn:
            if not hasattr(path, 'read') and os.path.isdir(path):
                files_to_process.extend([os.path.join(path, f)
                                         for f in sorted(os.listdir(path))
                                         if (f.endswith('.yml') or
                                             f.endswith('.yaml'))])
            else:
                files_to_process.append(path)

        for in_file in files_to_process:
            if hasattr(in_file, 'read'):
                logger.debug("Parsing YAML stream {0}".format(
                    getattr(in_file, 'name', in_file)))
                self._parse_fp(in_file)
            else:
                logger.debug("Parsing YAML file {0}".format(in_file))
                self.parse(in_file)

    def _parse_fp(self, fp):
        fname = getattr(fp, 'name', fp)
        try:
            data = yaml.safe_load(fp)
        except yaml.YAMLError as e:
            raise YAMLFormatError("Unable to parse '{0}': {1}".format(fname,
                                                                      e))
        if not data:
            return
        if not isinstance(data, list):
            raise YAMLFormatError(
                "The topmost collection in file '{fname}' must be a list,"
                " not a {cls}".format(fname=fname, cls=type(data)))
        for item in data:
            if not isinstance(item, dict):
                raise YAMLFormatError(
                    "Unexpected entry {0!r} in '{1}'".format(item, fname))
            if len(item) > 1:
                # Syntax error
                raise YAMLFormatError("Syntax error, for item "
                                      "named '{0}'. Missing indent?"
                                      .format(item.get('name')))
            cls, dfn = next(iter(item.items()))
            if cls not in ('job', 'defaults'):
                logger.warning("Ignoring unsupported '{0}' entry in '{1}'"
                               .format(cls, fname))
                continue
            if not isinstance(dfn, dict) or 'name' not in dfn:
                raise YAMLFormatError(
                    "The '{0}' entry in '{1}' must have a name".format(cls,
                                                                       fname))
            group = self.data.setdefault(cls, {})
            if dfn['name'] in group:
                self._handle_dups(
                    "Duplicate entry found in '{0}': '{1}' already "
                    "defined".format(fname, dfn['name']))
            group[dfn['name']] = dfn

    def parse(self, fn):
        with io.open(fn, 'r', encoding='utf-8') as fp:
            self._parse_fp(fp)

    def _handle_dups(self, message):
        if not self.allow_duplicates:
            logger.error(message)
            raise JenkinsScmException(message)
        else:
            logger.warning(message)

    def _applyDefaults(self, data):
        whichdefaults = data.get('defaults', 'global')
        defaults = copy.deepcopy(self.data.get('defaults',
                                 {}).get(whichdefaults, {}))
        if defaults == {} and whichdefaults != 'global':
            raise JenkinsScmException("Unknown defaults set: '{0}'"
                                      .format(whichdefaults))

        newdata = {}
        newdata.update(defaults)
        newdata.update(data)
        return newdata

    def expandYaml(self):
        self.jobs = []
        for job in self.data.get('job', {}).values():
            job = self._applyDefaults(job)
            logger.debug("Expanding job '{0}'".format(job['name']))
            self.jobs.append(job)
        return self.jobs
