# Copyright 2012 Hewlett-Packard Development Company, L.P.
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
Descriptors hold the configuration of a single SCM before it is turned into
a configuration tree by :py:mod:`jenkins_scm.modules.scm`.

Each descriptor can be built from the YAML data of an ``scm`` component::

    - git:
        url: https://example.org/project.git
        branches:
          - master

or directly from Python::

    GitScm(remotes=[GitRemote(url='https://example.org/project.git')])
"""

import logging

from jenkins_scm.errors import AttributeConflictError
from jenkins_scm.errors import InvalidAttributeError
from jenkins_scm.errors import InvariantViolationError
from jenkins_scm.errors import MissingAttributeError
from jenkins_scm.errors import UnsupportedCombinationError
from jenkins_scm.modules.base import Base
import jenkins_scm.modules.helpers as helpers

logger = logging.getLogger(__name__)


def as_list(value):
    """Accept a single string where a list of strings is expected."""
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    return list(value)


class GitRemote(Base):
    mapping = [
        # option, attribute, default value
        ('url', 'url', None),
        ('name', 'name', None),
        ('refspec', 'refspec', None),
        ('credentials-id', 'credentials_id', None),
    ]

    @classmethod
    def from_data(cls, data):
        # remotes may be given as a single key dictionary: {name: {url: ..}}
        if len(data) == 1 and 'url' not in data:
            name, params = next(iter(data.items()))
            if isinstance(params, dict):
                remote = super(GitRemote, cls).from_data(params)
                remote.name = name
                return remote
        return super(GitRemote, cls).from_data(data)

    def validate(self):
        if not self.url:
            raise MissingAttributeError('url')


class GitBrowser(Base):
    browsers = {
        'auto': 'auto',
        'assemblaweb': 'AssemblaWeb',
        'bitbucketweb': 'BitbucketWeb',
        'cgit': 'CGit',
        'fisheye': 'FisheyeGitRepositoryBrowser',
        'gitblit': 'GitBlitRepositoryBrowser',
        'githubweb': 'GithubWeb',
        'gitiles': 'Gitiles',
        'gitlab': 'GitLab',
        'gitlist': 'GitList',
        'gitoriousweb': 'GitoriousWeb',
        'gitweb': 'GitWeb',
        'kiln': 'KilnGit',
        'phabricator': 'Phabricator',
        'redmineweb': 'RedmineWeb',
        'rhodecode': 'RhodeCode',
        'stash': 'Stash',
        'viewgit': 'ViewGitWeb',
    }

    mapping = [
        ('browser', 'kind', 'auto'),
        ('browser-url', 'url', None),
        ('browser-version', 'version', '0.0'),
        ('project-name', 'project_name', ''),
        ('repo-name', 'repo_name', ''),
    ]

    @property
    def class_name(self):
        return 'hudson.plugins.git.browser.' + self.browsers[self.kind]

    def validate(self):
        if self.kind not in self.browsers:
            raise InvalidAttributeError('browser', self.kind,
                                        sorted(self.browsers.keys()))
        if self.kind != 'auto' and not self.url:
            raise MissingAttributeError('browser-url')


class GitMergeOptions(Base):
    strategies = ['default', 'resolve', 'recursive', 'octopus', 'ours',
                  'subtree']
    fast_forward_modes = ['FF', 'FF_ONLY', 'NO_FF']

    mapping = [
        ('remote', 'remote', 'origin'),
        ('branch', 'branch', None),
        ('strategy', 'strategy', 'default'),
        ('fast-forward-mode', 'fast_forward_mode', 'FF'),
    ]

    def validate(self):
        if not self.branch:
            raise MissingAttributeError('branch')
        if self.strategy not in self.strategies:
            raise InvalidAttributeError('strategy', self.strategy,
                                        self.strategies)
        if self.fast_forward_mode not in self.fast_forward_modes:
            raise InvalidAttributeError('fast-forward-mode',
                                        self.fast_forward_mode,
                                        self.fast_forward_modes)


class GitBuildChooser(Base):
    strategies = {
        'default': 'hudson.plugins.git.util.DefaultBuildChooser',
        'inverse': 'hudson.plugins.git.util.InverseBuildChooser',
        'gerrit': ('com.sonyericsson.hudson.plugins.'
                   'gerrit.trigger.hudsontrigger.GerritTriggerBuildChooser'),
        'ancestry': 'hudson.plugins.git.util.AncestryBuildChooser',
        'alternative': ('org.jenkinsci.plugins.git.chooser.alternative.'
                        'AlternativeBuildChooser'),
    }

    mapping = [
        ('choosing-strategy', 'strategy', 'default'),
        ('max-age', 'maximum_age_in_days', None),
        ('ancestor-commit-sha1', 'ancestor_commit_sha1', None),
    ]

    @property
    def class_name(self):
        return self.strategies[self.strategy]

    def validate(self):
        if self.strategy not in self.strategies:
            raise InvalidAttributeError('choosing-strategy', self.strategy,
                                        sorted(self.strategies.keys()))
        if self.strategy == 'ancestry':
            if self.maximum_age_in_days is None:
                raise MissingAttributeError('max-age')
            if not self.ancestor_commit_sha1:
                raise MissingAttributeError('ancestor-commit-sha1')


class GitScm(Base):
    kind = 'git'
    plugin = 'git'

    mapping = [
        ('remotes', 'remotes', []),
        ('branches', 'branches', []),
        ('clean', 'clean', False),
        ('wipe-workspace', 'wipe_out_workspace', False),
        ('prune', 'prune_branches', False),
        ('fastpoll', 'remote_poll', False),
        ('ignore-notify', 'ignore_notify_commit', False),
        ('basedir', 'relative_target_dir', None),
        ('local-branch', 'local_branch', None),
        ('create-tag', 'create_tag', False),
        ('shallow-clone', 'shallow_clone', False),
        ('reference-repo', 'reference', None),
        ('timeout', 'clone_timeout', None),
        ('git-tool', 'git_tool', 'Default'),
        (None, 'browser', None),
        (None, 'merge_options', None),
        (None, 'build_chooser', None),
        (None, 'extensions', []),
    ]

    @classmethod
    def from_data(cls, data):
        if data is None:
            data = {}
        scm = super(GitScm, cls).from_data(data)

        if 'remotes' in data:
            scm.remotes = [GitRemote.from_data(remote)
                           for remote in data['remotes']]
        elif 'url' in data:
            scm.remotes = [GitRemote.from_data(data)]
        scm.branches = as_list(scm.branches)

        # skip-tag is the inverse of create-tag
        if 'skip-tag' in data and 'create-tag' not in data:
            scm.create_tag = not data['skip-tag']

        if data.get('browser', 'auto') != 'auto':
            scm.browser = GitBrowser.from_data(data)
        if 'merge' in data:
            scm.merge_options = GitMergeOptions.from_data(data['merge'])
        if 'choosing-strategy' in data:
            scm.build_chooser = GitBuildChooser.from_data(data)
        if 'extensions' in data:
            scm.extensions = helpers.git_extensions(data['extensions'])
        return scm

    def validate(self):
        for remote in self.remotes:
            remote.validate()
        for sub_config in (self.browser, self.merge_options,
                           self.build_chooser):
            if sub_config is not None:
                sub_config.validate()


class HgScm(Base):
    kind = 'hg'
    plugin = 'mercurial'

    mapping = [
        ('url', 'url', None),
        ('modules', 'modules', []),
        ('tag', 'tag', None),
        ('branch', 'branch', None),
        ('clean', 'clean', False),
        ('credentials-id', 'credentials_id', None),
        ('installation', 'installation', None),
        ('subdir', 'subdirectory', None),
        ('disable-changelog', 'disable_changelog', False),
    ]

    @classmethod
    def from_data(cls, data):
        if data is None:
            data = {}
        scm = super(HgScm, cls).from_data(data)
        scm.modules = as_list(scm.modules)

        # revision-type/revision spelling of tag and branch
        if 'revision' in data:
            revision_type = str(data.get('revision-type', 'branch')).lower()
            if revision_type not in ('branch', 'tag'):
                raise InvalidAttributeError('revision-type', revision_type,
                                            ['branch', 'tag'])
            setattr(scm, revision_type, data['revision'])
        return scm

    def validate(self):
        if not self.url:
            raise MissingAttributeError('url')
        if self.tag and self.branch:
            raise AttributeConflictError('tag', ['branch'])


class SvnLocation(Base):
    depths = ['infinity', 'empty', 'files', 'immediates', 'unknown']

    mapping = [
        ('url', 'url', None),
        ('basedir', 'directory', '.'),
        ('credentials-id', 'credentials_id', None),
        ('repo-depth', 'depth', 'infinity'),
        ('ignore-externals', 'ignore_externals', False),
    ]

    def validate(self):
        if not self.url:
            raise MissingAttributeError('url')
        if self.depth not in self.depths:
            raise InvalidAttributeError('repo-depth', self.depth,
                                        self.depths)


class SvnScm(Base):
    kind = 'svn'
    plugin = 'subversion'

    checkout_strategies = {
        'update': 'UpdateUpdater',
        'checkout': 'CheckoutUpdater',
        'update-with-clean': 'UpdateWithCleanUpdater',
        'update-with-revert': 'UpdateWithRevertUpdater',
    }

    # names used by older job definitions
    checkout_strategy_aliases = {
        'wipeworkspace': 'checkout',
        'emulateclean': 'update-with-clean',
        'revertupdate': 'update-with-revert',
    }

    mapping = [
        ('repos', 'locations', []),
        ('workspaceupdater', 'checkout_strategy', 'update'),
        ('excluded-regions', 'excluded_regions', []),
        ('included-regions', 'included_regions', []),
        ('excluded-users', 'excluded_users', []),
        ('excluded-commit-messages', 'excluded_commit_messages', []),
        ('exclusion-revprop-name', 'excluded_revision_property', ''),
    ]

    @classmethod
    def from_data(cls, data):
        if data is None:
            data = {}
        scm = super(SvnScm, cls).from_data(data)
        if 'repos' in data:
            scm.locations = [SvnLocation.from_data(repo)
                             for repo in data['repos']]
        elif 'url' in data:
            scm.locations = [SvnLocation.from_data(data)]

        strategy = scm.checkout_strategy
        if strategy in cls.checkout_strategy_aliases:
            scm.checkout_strategy = cls.checkout_strategy_aliases[strategy]

        for attr in ('excluded_regions', 'included_regions',
                     'excluded_users', 'excluded_commit_messages'):
            setattr(scm, attr, as_list(getattr(scm, attr)))
        return scm

    @property
    def updater_class(self):
        return ('hudson.scm.subversion.' +
                self.checkout_strategies[self.checkout_strategy])

    def validate(self):
        if not self.locations:
            raise InvariantViolationError(
                'One or more locations must be specified')
        for location in self.locations:
            location.validate()
        if self.checkout_strategy not in self.checkout_strategies:
            raise InvalidAttributeError(
                'workspaceupdater', self.checkout_strategy,
                sorted(self.checkout_strategies.keys()))


class PerforceScm(Base):
    kind = 'p4'
    plugin = 'perforce'

    mapping = [
        ('viewspec', 'viewspec', None),
        ('user', 'user', 'rolem'),
        ('password', 'password', ''),
    ]

    def validate(self):
        if not self.viewspec:
            raise MissingAttributeError('viewspec')


class ClearCaseScm(Base):
    kind = 'clearcase'
    plugin = 'clearcase'

    mapping = [
        ('load-rules', 'load_rules', []),
        ('mkview-optional-parameters', 'mkview_optional_parameters', []),
        ('config-spec', 'config_spec', []),
        ('view-name', 'view_name',
         'Jenkins_${USER_NAME}_${NODE_NAME}_${JOB_NAME}'
         '${DASH_WORKSPACE_NUMBER}'),
        ('view-path', 'view_path', 'view'),
    ]

    @classmethod
    def from_data(cls, data):
        scm = super(ClearCaseScm, cls).from_data(data)
        for attr in ('load_rules', 'mkview_optional_parameters',
                     'config_spec'):
            setattr(scm, attr, as_list(getattr(scm, attr)))
        return scm


class RtcScm(Base):
    kind = 'rtc'
    plugin = 'teamconcert'

    mapping = [
        ('override-global', 'override_global', False),
        ('timeout', 'timeout', 0),
        ('build-tool', 'build_tool', None),
        ('server-uri', 'server_uri', None),
        ('credentials-id', 'credentials_id', None),
        ('build-definition', 'build_definition', None),
        ('build-workspace', 'build_workspace', None),
    ]

    @classmethod
    def from_data(cls, data):
        if data is None:
            data = {}
        scm = super(RtcScm, cls).from_data(data)

        # a connection section overrides the global RTC configuration
        connection = data.get('connection')
        if connection:
            scm.override_global = True
            scm.build_tool = connection.get('build-tool')
            scm.server_uri = connection.get('server-uri')
            scm.credentials_id = connection.get('credentials-id')
            scm.timeout = connection.get('timeout', scm.timeout)
        return scm

    @property
    def build_type(self):
        if self.build_definition:
            return 'buildDefinition'
        if self.build_workspace:
            return 'buildWorkspace'
        return None

    def validate(self):
        if self.build_definition and self.build_workspace:
            raise AttributeConflictError('build-definition',
                                         ['build-workspace'])
        if self.build_type is None:
            raise UnsupportedCombinationError(['build-definition',
                                               'build-workspace'])


class CloneWorkspaceScm(Base):
    kind = 'workspace'
    plugin = 'clone-workspace-scm'

    criteria_list = ['Any', 'Not Failed', 'Successful']

    mapping = [
        ('parent-job', 'parent_project', None),
        ('criteria', 'criteria', 'Any'),
    ]

    def validate(self):
        if not self.parent_project:
            raise MissingAttributeError('parent-job')
        if self.criteria not in self.criteria_list:
            raise InvalidAttributeError('criteria', self.criteria,
                                        self.criteria_list)


DESCRIPTORS = dict((cls.kind, cls) for cls in [
    GitScm,
    HgScm,
    SvnScm,
    PerforceScm,
    ClearCaseScm,
    RtcScm,
    CloneWorkspaceScm,
])
