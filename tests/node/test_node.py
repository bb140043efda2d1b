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

from jenkins_scm.node import Node
from jenkins_scm.node import SubNode
from tests import base


class TestNode(base.BaseTestCase):

    def test_empty_label(self):
        self.assertRaises(ValueError, Node, '')
        self.assertRaises(ValueError, Node, None)

    def test_children_order(self):
        root = Node('scm', {'class': 'hudson.scm.NullSCM'})
        root.append_node('source', 'https://example.org')
        SubNode(root, 'modules')
        root.append_node('clean', False)

        self.assertEqual(['source', 'modules', 'clean'], root.labels())
        self.assertEqual(3, len(root))
        self.assertEqual('modules', root[1].label)
        self.assertIsNone(root.find('modules').value)
        self.assertIsNone(root.find('missing'))

    def test_append_requires_node(self):
        root = Node('scm')
        self.assertRaises(TypeError, root.append, 'child')

    def test_structural_equality(self):
        def build():
            root = Node('scm', {'class': 'hudson.plugins.git.GitSCM'})
            remote = SubNode(root, 'userRemoteConfigs')
            remote.append_node('url', 'https://example.org/project.git')
            return root

        self.assertEqual(build(), build())

        other = build()
        other.find('userRemoteConfigs')[0].value = 'https://example.org/x'
        self.assertNotEqual(build(), other)

        other = build()
        other.attributes['class'] = 'hudson.scm.NullSCM'
        self.assertNotEqual(build(), other)

    def test_findall_and_remove(self):
        root = Node('extensions')
        first = root.append_node('ext', 'a')
        root.append_node('other')
        root.append_node('ext', 'b')

        self.assertEqual(['a', 'b'], [n.value for n in root.findall('ext')])
        root.remove(first)
        self.assertEqual(['other', 'ext'], root.labels())

    def test_to_xml(self):
        root = Node('scm', {'class': 'hudson.plugins.mercurial.MercurialSCM'})
        root.append_node('clean', True)
        root.append_node('timeout', 0)
        root.append_node('modules')
        root.append_node('revision', 'default')

        xml = root.to_xml()
        self.assertEqual('scm', xml.tag)
        self.assertEqual('hudson.plugins.mercurial.MercurialSCM',
                         xml.get('class'))
        self.assertEqual('true', xml.find('clean').text)
        self.assertEqual('0', xml.find('timeout').text)
        self.assertIsNone(xml.find('modules').text)
        self.assertEqual('default', xml.find('revision').text)
        self.assertEqual(['clean', 'timeout', 'modules', 'revision'],
                         [child.tag for child in xml])
