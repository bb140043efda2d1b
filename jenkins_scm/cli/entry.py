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

import logging
import os
import sys

from stevedore import extension

from jenkins_scm.cli.parser import create_parser
from jenkins_scm.cli.parser import SUBCOMMAND_NAMESPACE
from jenkins_scm.config import load_plugins_info
from jenkins_scm.config import ScmBuilderConfig
from jenkins_scm.errors import ScmBuilderConfigException

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger()


class JenkinsScm(object):
    """ This is the entry point class for the `jenkins-scm` command line tool.

    Scripts may pass `jenkins-scm` arguments directly to this class instead
    of running the tool in a subprocess.
    """

    def __init__(self, args=None, **kwargs):
        if args is None:
            args = []
        self.parser = create_parser()
        self.options = self.parser.parse_args(args)

        self.config = ScmBuilderConfig(self.options.conf, **kwargs)

        if not self.options.command:
            self.parser.error("Must specify a 'command' to be performed")

        if (self.options.log_level is not None):
            self.options.log_level = getattr(logging,
                                             self.options.log_level.upper(),
                                             logger.getEffectiveLevel())
            logger.setLevel(self.options.log_level)

        self._parse_additional()
        self.config.validate()

    def _parse_additional(self):
        if getattr(self.options, 'multiscm', None):
            self.config.builder['allow_multiscm'] = True

        if getattr(self.options, 'plugins_info_path', None) is not None:
            try:
                plugins_info = load_plugins_info(
                    self.options.plugins_info_path)
            except ScmBuilderConfigException as e:
                self.parser.error(str(e))
            self.config.builder['plugins_info'] = plugins_info

        if getattr(self.options, 'path', None):
            if hasattr(self.options.path, 'read'):
                logger.debug("Input file is stdin")
                self.options.path = [self.options.path]
            else:
                # take list of paths
                paths = []
                for path in self.options.path:
                    paths.extend(path.split(os.pathsep))
                self.options.path = paths

    def execute(self):

        extension_manager = extension.ExtensionManager(
            namespace=SUBCOMMAND_NAMESPACE,
            invoke_on_load=True,)

        ext = extension_manager[self.options.command]
        ext.obj.execute(self.options, self.config)


def main():
    argv = sys.argv[1:]
    jsb = JenkinsScm(argv)
    jsb.execute()


if __name__ == "__main__":
    main()
