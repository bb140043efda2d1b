# Copyright 2015 Thanh Ha
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

import base64
import logging

from cryptography.hazmat.decrepit.ciphers.algorithms import TripleDES
from cryptography.hazmat.primitives import padding
from cryptography.hazmat.primitives.ciphers import Cipher
from cryptography.hazmat.primitives.ciphers import modes

from jenkins_scm.errors import InvalidAttributeError
from jenkins_scm.errors import MissingAttributeError
from jenkins_scm.node import Node
from jenkins_scm.node import SubNode

logger = logging.getLogger(__name__)

GIT_EXTENSION_PREFIX = 'hudson.plugins.git.extensions.impl.'


def convert_mapping_to_node(parent, data, mapping, fail_required=True):
    """Convert mapping to child nodes of parent

    Each mapping entry is a tuple of (option name, node label, default
    value[, valid values]). The option is looked up in data, which is either
    a dictionary of YAML options or a dictionary of descriptor attributes.

    fail_required affects the last parameter of the mapping field when it's
    parameter is set to 'None'. When fail_required is True then a 'None' value
    represents a required configuration so will raise a MissingAttributeError
    if the user does not provide the configuration.

    If fail_required is False parameter is treated as optional and no node is
    created for it.

    valid values are either a list of accepted options, or a dictionary whose
    keys are the accepted options and whose values are written to the node.
    An unsupported value raises an InvalidAttributeError.
    """
    for elem in mapping:
        (optname, label, val) = elem[:3]
        val = data.get(optname, val)

        valid_options = []
        valid_dict = {}
        if len(elem) == 4:
            if type(elem[3]) is list:
                valid_options = elem[3]
            if type(elem[3]) is dict:
                valid_dict = elem[3]

        if val is None and fail_required is True:
            raise MissingAttributeError(optname)

        if val is None and fail_required is False:
            continue

        if valid_dict:
            if val not in valid_dict:
                raise InvalidAttributeError(optname, val,
                                            sorted(valid_dict.keys()))
            val = valid_dict[val]

        if valid_options:
            if val not in valid_options:
                raise InvalidAttributeError(optname, val, valid_options)

        SubNode(parent, label, value=val)


def git_extensions(data):
    """Build git plugin extension nodes from YAML extension options.

    :arg dict data: the ``extensions`` dictionary of a git component
    :returns: list of Node
    """
    extensions = []

    def extension(name):
        ext = Node(GIT_EXTENSION_PREFIX + name)
        extensions.append(ext)
        return ext

    if data.get('clean-before', False):
        extension('CleanBeforeCheckout')
    if data.get('clean-after', False):
        extension('CleanCheckout')
    if 'included-regions' in data or 'excluded-regions' in data:
        ext = extension('PathRestriction')
        ext.append_node('includedRegions',
                        '\n'.join(data.get('included-regions', [])))
        ext.append_node('excludedRegions',
                        '\n'.join(data.get('excluded-regions', [])))
    if 'excluded-users' in data:
        ext = extension('UserExclusion')
        ext.append_node('excludedUsers', '\n'.join(data['excluded-users']))
    for msg in data.get('ignore-commits-with-messages', []):
        ext = extension('MessageExclusion')
        ext.append_node('excludedMessage', msg)
    if 'scm-name' in data:
        ext = extension('ScmName')
        ext.append_node('name', data['scm-name'])
    if 'submodule' in data:
        submodule = data['submodule'] or {}
        ext = extension('SubmoduleOption')
        mapping = [
            ('disable', 'disableSubmodules', False),
            ('recursive', 'recursiveSubmodules', False),
            ('tracking', 'trackingSubmodules', False),
            ('parent-credentials', 'parentCredentials', False),
            ('reference-repo', 'reference', ''),
            ('timeout', 'timeout', 10),
        ]
        convert_mapping_to_node(ext, submodule, mapping)
    if data.get('per-build-tag', False):
        extension('PerBuildTag')

    unknown = set(data) - set([
        'clean-before', 'clean-after', 'included-regions', 'excluded-regions',
        'excluded-users', 'ignore-commits-with-messages', 'scm-name',
        'submodule', 'per-build-tag'])
    for name in sorted(unknown):
        logger.warning("Ignoring unknown git extension '%s'", name)

    return extensions


class PerforcePasswordEncryptor(object):
    """Password scrambling compatible with the Perforce plugin.

    The plugin stores passwords encrypted with Triple-DES using a fixed key,
    so already encrypted values are recognized by their prefix and left
    untouched.
    """

    ENCRYPTION_PREFIX = '0f0kqlwa'
    KEY = b'405kqo0gc20f9985142rj17779v2922568b'

    def _cipher(self):
        return Cipher(TripleDES(self.KEY[:24]), modes.ECB())

    def is_encrypted(self, value):
        return value is not None and value.startswith(self.ENCRYPTION_PREFIX)

    def encrypt(self, value):
        if value is None or value == '':
            return value
        padder = padding.PKCS7(TripleDES.block_size).padder()
        padded = padder.update(value.encode('utf-8')) + padder.finalize()
        encryptor = self._cipher().encryptor()
        encrypted = encryptor.update(padded) + encryptor.finalize()
        return self.ENCRYPTION_PREFIX + base64.b64encode(
            encrypted).decode('ascii')

    def decrypt(self, value):
        if not self.is_encrypted(value):
            return value
        encrypted = base64.b64decode(value[len(self.ENCRYPTION_PREFIX):])
        decryptor = self._cipher().decryptor()
        padded = decryptor.update(encrypted) + decryptor.finalize()
        unpadder = padding.PKCS7(TripleDES.block_size).unpadder()
        return (unpadder.update(padded) + unpadder.finalize()).decode('utf-8')
