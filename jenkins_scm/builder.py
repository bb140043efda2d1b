#!/usr/bin/env python
# Copyright (C) 2012 OpenStack, LLC.
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

# Collects the scm configuration trees of a job.

import copy
import logging

from jenkins_scm.errors import InvalidAttributeError
from jenkins_scm.errors import JenkinsScmException
from jenkins_scm.errors import MissingAttributeError
from jenkins_scm.errors import MultipleScmError
from jenkins_scm.modules import descriptors
from jenkins_scm.modules import scm as scm_module
from jenkins_scm import versions

__all__ = [
    "ScmContext"
]

logger = logging.getLogger(__name__)

GITHUB_URL_FORMATS = {
    'https': 'https://{host}/{project}.git',
    'ssh': 'git@{host}:{project}.git',
    'git': 'git://{host}/{project}.git',
}


class ScmContext(object):
    """Ordered collection of the scm trees of one job.

    Unless ``multi_enabled`` is set, at most one scm can be added. Every
    producing operation accepts an optional ``configure`` callable which
    receives the finished tree before it is added; its return value is
    ignored.

    :arg registry: plugin version lookup providing
        ``get_plugin_version(name)``, see
        :py:class:`jenkins_scm.registry.PluginRegistry` (optional)
    :arg bool multi_enabled: allow more than one scm
    :arg callable notify: receives deprecation notices (default: log a
        warning)
    """

    def __init__(self, registry=None, multi_enabled=False, notify=None):
        self.registry = registry
        self.multi_enabled = multi_enabled
        self.notify = notify
        self.scm_nodes = []

    @property
    def scm_node(self):
        """The first scm tree, or None if no scm was added."""
        if not self.scm_nodes:
            return None
        return self.scm_nodes[0]

    def validate_multi(self):
        if not self.multi_enabled and len(self.scm_nodes) >= 1:
            raise MultipleScmError(len(self.scm_nodes))

    def resolve_variant(self, kind):
        if kind in versions.VERSION_GATES:
            return versions.resolve_gate(kind, self.registry, self.notify)
        return versions.CURRENT

    def _descriptor(self, kind, scm):
        cls = descriptors.DESCRIPTORS[kind]
        if scm is None or isinstance(scm, dict):
            return cls.from_data(scm)
        if not isinstance(scm, cls):
            raise TypeError("Expected %s or a dict for scm '%s', got %r"
                            % (cls.__name__, kind, scm))
        return scm

    def _append(self, node, configure=None):
        if configure is not None:
            configure(node)
        self.scm_nodes.append(node)
        return node

    def _add(self, kind, scm, configure=None):
        self.validate_multi()
        scm = self._descriptor(kind, scm)
        scm.validate()
        variant = self.resolve_variant(kind)
        logger.debug("Generating %s scm (%s schema)", kind, variant)
        node = scm_module.SYNTHESIZERS[kind](scm, variant)
        return self._append(node, configure)

    def git(self, scm=None, configure=None):
        """Add a git repository.

        :arg scm: a :py:class:`GitScm` or the YAML options of a git component
        """
        return self._add('git', scm, configure)

    def git_simple(self, url, branch=None, configure=None):
        scm = descriptors.GitScm(
            remotes=[descriptors.GitRemote(url=url)],
            branches=[branch] if branch else [],
            create_tag=True)
        return self.git(scm, configure)

    def github(self, owner_and_project, branch=None, protocol='https',
               host='github.com', configure=None):
        if protocol not in GITHUB_URL_FORMATS:
            raise InvalidAttributeError('protocol', protocol,
                                        sorted(GITHUB_URL_FORMATS.keys()),
                                        module_name='scm.github')
        url = GITHUB_URL_FORMATS[protocol].format(host=host,
                                                  project=owner_and_project)
        browser = descriptors.GitBrowser(
            kind='githubweb',
            url='https://{0}/{1}/'.format(host, owner_and_project))
        scm = descriptors.GitScm(
            remotes=[descriptors.GitRemote(url=url)],
            branches=[branch] if branch else [],
            browser=browser)
        return self.git(scm, configure)

    def hg_simple(self, url, branch=None, configure=None):
        """Add a Mercurial repository, checking out a branch.

        Mercurial plugins older than 1.50.1 get the legacy flat schema, later
        versions are handled by :py:meth:`hg`.
        """
        self.validate_multi()
        if self.resolve_variant('hg') == versions.LEGACY:
            if url is None:
                raise MissingAttributeError('url', module_name='scm.hg')
            return self._append(scm_module.hg_legacy(url, branch), configure)

        data = {}
        if branch:
            data['branch'] = branch
        return self.hg(url, data, configure)

    def hg(self, url=None, scm=None, configure=None):
        self.validate_multi()
        scm = self._descriptor('hg', scm)
        if url is not None:
            scm = copy.copy(scm)
            scm.url = url
        return self._add('hg', scm, configure)

    def svn(self, scm=None, configure=None):
        return self._add('svn', scm, configure)

    def svn_simple(self, url, local_dir='.', configure=None):
        location = descriptors.SvnLocation(url=url, directory=local_dir)
        return self.svn(descriptors.SvnScm(locations=[location]), configure)

    def p4(self, viewspec, user='rolem', password='', configure=None):
        scm = descriptors.PerforceScm(viewspec=viewspec, user=user,
                                      password=password)
        return self._add('p4', scm, configure)

    def clone_workspace(self, parent_project, criteria='Any',
                        configure=None):
        scm = descriptors.CloneWorkspaceScm(parent_project=parent_project,
                                            criteria=criteria)
        return self._add('workspace', scm, configure)

    def clearcase(self, scm=None, configure=None):
        return self._add('clearcase', scm, configure)

    def rtc(self, scm=None, configure=None):
        return self._add('rtc', scm, configure)

    def dispatch(self, component, configure=None):
        """Add an scm from a YAML component.

        :arg component: either a singleton dictionary of
          ``kind: dict(options)`` or a simple kind name, e.g. ``git``
        """
        component_type = 'scm'

        if isinstance(component, dict):
            name, component_data = next(iter(component.items()))
        else:
            name = component
            component_data = {}

        if name not in descriptors.DESCRIPTORS:
            raise JenkinsScmException("Unknown entry point or macro '{0}' "
                                      "for component type: '{1}'.".
                                      format(name, component_type))
        return self._add(name, component_data, configure)
