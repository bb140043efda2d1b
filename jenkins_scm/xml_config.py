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

# Manage Jenkins scm XML config output.

import logging
from xml.dom import minidom
import xml.etree.ElementTree as XML

from jenkins_scm.builder import ScmContext
from jenkins_scm.errors import JenkinsScmException
from jenkins_scm.modules.scm import SCM
from jenkins_scm.node import Node

__all__ = [
    "XmlScmGenerator",
    "XmlScm"
]

logger = logging.getLogger(__name__)


class XmlScm(object):
    """The scm configuration of one job.

    :arg xml: the ``scm`` element, either a :py:class:`Node` or an
        ElementTree element
    :arg str name: the job name
    """

    def __init__(self, xml, name):
        if isinstance(xml, Node):
            xml = xml.to_xml()
        self.xml = xml
        self.name = name

    def output(self):
        out = minidom.parseString(XML.tostring(self.xml, encoding='UTF-8'))
        return out.toprettyxml(indent='  ', encoding='utf-8')


class XmlScmGenerator(object):
    """ This class is responsible for generating the scm configuration XML
    of the jobs returned by :py:class:`jenkins_scm.parser.YamlParser`.

    :arg registry: plugin version lookup shared by all jobs
    :arg bool multi_enabled: default for jobs that do not set ``multiscm``
    """

    def __init__(self, registry=None, multi_enabled=False):
        self.registry = registry
        self.multi_enabled = multi_enabled

    def generateXML(self, data_list):
        xml_objs = []
        for data in data_list:
            xml_objs.append(self._getXMLForData(data))
        return xml_objs

    def _getXMLForData(self, data):
        if 'name' not in data:
            raise JenkinsScmException("Job definition is missing a name")

        context = ScmContext(
            registry=self.registry,
            multi_enabled=data.get('multiscm', self.multi_enabled))
        scms = data.get('scm') or []
        if not isinstance(scms, list):
            raise JenkinsScmException(
                "'scm' of job '{0}' must be a list".format(data['name']))
        for component in scms:
            context.dispatch(component)
        logger.debug("Job %s: %d scm(s)", data['name'],
                     len(context.scm_nodes))
        return XmlScm(SCM().render(context.scm_nodes), data['name'])
