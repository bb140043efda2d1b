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

import errno
import io
import logging
import os
import sys
import time

import jenkins_scm.cli.subcommand.base as base
from jenkins_scm.parser import YamlParser
from jenkins_scm.registry import PluginRegistry
from jenkins_scm.xml_config import XmlScmGenerator


logger = logging.getLogger(__name__)


class TestSubCommand(base.BaseSubCommand):

    def parse_args(self, subparser):
        test = subparser.add_parser('test')

        test.add_argument(
            'path',
            nargs='*',
            default=sys.stdin,
            help="colon-separated list of paths to YAML files "
            "or directories")
        test.add_argument(
            '-p', '--plugin-info',
            dest='plugins_info_path',
            default=None,
            help='path to plugin info YAML file')
        test.add_argument(
            '--multiscm',
            action='store_true',
            dest='multiscm',
            default=None,
            help='allow more than one scm per job')
        test.add_argument(
            '-o',
            dest='output_dir',
            default=sys.stdout,
            help='path to output XML')

    def _generate_xmlscms(self, options, config):
        orig = time.time()

        parser = YamlParser(config)
        parser.load_files(options.path)
        job_data_list = parser.expandYaml()

        registry = PluginRegistry(config.builder['plugins_info'])
        generator = XmlScmGenerator(
            registry, multi_enabled=config.builder['allow_multiscm'])
        xml_scms = generator.generateXML(job_data_list)

        logging.debug('%d XML files generated in %ss',
                      len(xml_scms), time.time() - orig)
        return xml_scms

    def write_output(self, xml_scms, output):
        if not hasattr(output, 'write') and not os.path.isdir(output):
            logger.debug("Creating directory %s" % output)
            os.makedirs(output)

        for xml_scm in sorted(xml_scms, key=lambda x: x.name):
            if hasattr(output, 'write'):
                try:
                    output.write(xml_scm.output().decode('utf-8'))
                except IOError as exc:
                    if exc.errno == errno.EPIPE:
                        # EPIPE could happen if piping output to something
                        # that doesn't read the whole input (e.g.: the UNIX
                        # `head` command)
                        return
                    raise
                continue

            output_fn = os.path.join(output, xml_scm.name + '.xml')
            logger.debug("Writing XML to '{0}'".format(output_fn))
            with io.open(output_fn, 'w', encoding='utf-8') as f:
                f.write(xml_scm.output().decode('utf-8'))

    def execute(self, options, config):
        xml_scms = self._generate_xmlscms(options, config)
        self.write_output(xml_scms, options.output_dir)
        logger.info("Number of jobs generated:  %d", len(xml_scms))
