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
The SCM module turns validated SCM descriptors into the configuration trees
expected by the Jenkins source control plugins.

Every synthesizer takes a descriptor from
:py:mod:`jenkins_scm.modules.descriptors` and the schema variant resolved by
:py:mod:`jenkins_scm.versions`, and returns a new ``scm`` :py:class:`Node`.
Synthesizers do not validate; descriptors are validated before they are
called.

A job may reference several repositories. The :py:class:`SCM` wrapper folds
the list of trees into the single ``scm`` element of a job, which requires
the Jenkins Multiple SCMs plugin when more than one tree is present.
"""

import logging

import jenkins_scm.modules.helpers as helpers
from jenkins_scm.node import Node
from jenkins_scm.node import SubNode
from jenkins_scm import versions

logger = logging.getLogger(__name__)

SCM_CLASSES = {
    'git': 'hudson.plugins.git.GitSCM',
    'hg': 'hudson.plugins.mercurial.MercurialSCM',
    'svn': 'hudson.scm.SubversionSCM',
    'p4': 'hudson.plugins.perforce.PerforceSCM',
    'clearcase': 'hudson.plugins.clearcase.ClearCaseSCM',
    'rtc': 'com.ibm.team.build.internal.hjplugin.RTCScm',
    'workspace': 'hudson.plugins.cloneworkspace.CloneWorkspaceSCM',
}


def scm_node(kind):
    return Node('scm', {'class': SCM_CLASSES[kind]})


def git(scm, variant=versions.CURRENT):
    """Build a git plugin configuration.

    Older git plugins (before 2.0.0) read the clone options from flat
    elements, later versions from a CloneOption extension.
    """
    branches = scm.branches or ['**']
    extensions = list(scm.extensions)

    if variant == versions.CURRENT:
        if scm.shallow_clone or scm.reference or scm.clone_timeout:
            clone = Node(helpers.GIT_EXTENSION_PREFIX + 'CloneOption')
            clone.append_node('shallow', scm.shallow_clone)
            clone.append_node('reference', scm.reference)
            if scm.clone_timeout:
                clone.append_node('timeout', scm.clone_timeout)
            extensions.append(clone)
    elif extensions:
        logger.warning("Ignoring %d git extension(s), not supported by git "
                       "plugin versions older than 2.0.0", len(extensions))

    node = scm_node('git')
    user = SubNode(node, 'userRemoteConfigs')
    for remote in scm.remotes:
        remote_node = SubNode(user, 'hudson.plugins.git.UserRemoteConfig')
        if remote.name:
            remote_node.append_node('name', remote.name)
        if remote.refspec:
            remote_node.append_node('refspec', remote.refspec)
        remote_node.append_node('url', remote.url)
        if remote.credentials_id:
            remote_node.append_node('credentialsId', remote.credentials_id)

    branches_node = SubNode(node, 'branches')
    for branch in branches:
        spec = SubNode(branches_node, 'hudson.plugins.git.BranchSpec')
        spec.append_node('name', branch)

    node.append_node('configVersion', '2')
    for label in ('disableSubmodules', 'recursiveSubmodules',
                  'doGenerateSubmoduleConfigurations', 'authorOrCommitter'):
        node.append_node(label, 'false')

    mapping = [
        # attribute, node label, default value
        ('clean', 'clean', False),
        ('wipe_out_workspace', 'wipeOutWorkspace', False),
        ('prune_branches', 'pruneBranches', False),
        ('remote_poll', 'remotePoll', False),
        ('ignore_notify_commit', 'ignoreNotifyCommit', False),
        ('git_tool', 'gitTool', 'Default'),
    ]
    helpers.convert_mapping_to_node(node, vars(scm), mapping)

    if scm.relative_target_dir:
        node.append_node('relativeTargetDir', scm.relative_target_dir)
    if scm.local_branch:
        node.append_node('localBranch', scm.local_branch)
    node.append_node('skipTag', not scm.create_tag)

    if variant == versions.LEGACY:
        if scm.reference:
            node.append_node('reference', scm.reference)
        if scm.shallow_clone:
            node.append_node('useShallowClone', scm.shallow_clone)
    elif extensions:
        SubNode(node, 'extensions').extend(extensions)

    # auto lets the git plugin pick the browser, nothing to configure
    if scm.browser is not None and scm.browser.kind != 'auto':
        node.append(git_browser(scm.browser))
    if scm.merge_options is not None:
        node.append(git_merge_options(scm.merge_options))
    if scm.build_chooser is not None:
        node.append(git_build_chooser(scm.build_chooser))
    return node


def git_browser(browser):
    node = Node('browser', {'class': browser.class_name})
    node.append_node('url', browser.url)
    if browser.kind in ['gitblit', 'viewgit']:
        node.append_node('projectName', browser.project_name)
    if browser.kind == 'gitlab':
        node.append_node('version', browser.version)
    if browser.kind == 'phabricator':
        node.append_node('repo', browser.repo_name)
    return node


def git_merge_options(merge):
    node = Node('userMergeOptions')
    mapping = [
        ('remote', 'mergeRemote', 'origin'),
        ('branch', 'mergeTarget', None),
        ('strategy', 'mergeStrategy', 'default'),
        ('fast_forward_mode', 'fastForwardMode', 'FF'),
    ]
    helpers.convert_mapping_to_node(node, vars(merge), mapping)
    return node


def git_build_chooser(chooser):
    node = Node('buildChooser', {'class': chooser.class_name})
    if chooser.strategy == 'gerrit':
        node.append_node('separator', '#')
    elif chooser.strategy == 'ancestry':
        node.append_node('maximumAgeInDays', chooser.maximum_age_in_days)
        node.append_node('ancestorCommitSha1', chooser.ancestor_commit_sha1)
    return node


def hg_legacy(url, branch=None):
    """Mercurial configuration for plugin versions older than 1.50.1."""
    node = scm_node('hg')
    node.append_node('source', url)
    node.append_node('modules', '')
    node.append_node('clean', False)
    node.append_node('branch', branch or '')
    return node


def hg(scm, variant=versions.CURRENT):
    node = scm_node('hg')
    node.append_node('source', scm.url)
    node.append_node('modules', ' '.join(scm.modules))
    node.append_node('revisionType', 'TAG' if scm.tag else 'BRANCH')
    node.append_node('revision', scm.tag or scm.branch or 'default')
    node.append_node('clean', scm.clean)
    node.append_node('credentialsId', scm.credentials_id or '')
    node.append_node('disableChangeLog', scm.disable_changelog)
    if scm.installation:
        node.append_node('installation', scm.installation)
    if scm.subdirectory:
        node.append_node('subdir', scm.subdirectory)
    return node


def svn(scm, variant=versions.CURRENT):
    node = scm_node('svn')
    locations = SubNode(node, 'locations')
    for location in scm.locations:
        module = SubNode(locations, 'hudson.scm.SubversionSCM_-ModuleLocation')
        module.append_node('remote', location.url)
        module.append_node('local', location.directory)
        module.append_node('depthOption', location.depth)
        module.append_node('ignoreExternalsOption', location.ignore_externals)
        if location.credentials_id:
            module.append_node('credentialsId', location.credentials_id)

    SubNode(node, 'workspaceUpdater', {'class': scm.updater_class})
    node.append_node('excludedRegions', '\n'.join(scm.excluded_regions))
    node.append_node('includedRegions', '\n'.join(scm.included_regions))
    node.append_node('excludedUsers', '\n'.join(scm.excluded_users))
    node.append_node('excludedCommitMessages',
                     '\n'.join(scm.excluded_commit_messages))
    node.append_node('excludedRevprop', scm.excluded_revision_property or '')
    return node


def p4(scm, variant=versions.CURRENT, encryptor=None):
    if encryptor is None:
        encryptor = helpers.PerforcePasswordEncryptor()
    password = scm.password
    if not encryptor.is_encrypted(password):
        password = encryptor.encrypt(password)

    node = scm_node('p4')
    node.append_node('p4User', scm.user)
    node.append_node('p4Passwd', password)
    node.append_node('p4Port', 'perforce:1666')
    node.append_node('p4Client', 'builds-${JOB_NAME}')
    node.append_node('projectPath', scm.viewspec)
    node.append_node('projectOptions',
                     'noallwrite clobber nocompress unlocked nomodtime rmdir')
    node.append_node('p4Tool', 'p4')
    node.append_node('p4SysDrive', 'C:')
    node.append_node('p4SysRoot', 'C:\\WINDOWS')
    for label, value in [
            ('useClientSpec', False),
            ('forceSync', False),
            ('alwaysForceSync', False),
            ('dontUpdateServer', False),
            ('disableAutoSync', False),
            ('disableSyncOnly', False),
            ('useOldClientName', False),
            ('updateView', True),
            ('dontRenameClient', False),
            ('updateCounterValue', False),
            ('dontUpdateClient', False),
            ('exposeP4Passwd', False),
            ('wipeBeforeBuild', True),
            ('wipeRepoBeforeBuild', False),
            ('firstChange', -1),
            ('slaveClientNameFormat', '${basename}-${nodename}'),
            ('lineEndValue', ''),
            ('useViewMask', False),
            ('useViewMaskForPolling', False),
            ('useViewMaskForSyncing', False),
            ('pollOnlyOnMaster', True)]:
        node.append_node(label, value)
    return node


def clearcase(scm, variant=versions.CURRENT):
    node = scm_node('clearcase')
    for label, value in [
            ('changeset', 'BRANCH'),
            ('createDynView', False),
            ('excludedRegions', ''),
            ('extractLoadRules', False),
            ('filteringOutDestroySubBranchEvent', False),
            ('freezeCode', False),
            ('loadRules', '\n'.join(scm.load_rules)),
            ('loadRulesForPolling', ''),
            ('mkviewOptionalParam',
             '\n'.join(scm.mkview_optional_parameters)),
            ('multiSitePollBuffer', 0),
            ('recreateView', False),
            ('removeViewOnRename', False),
            ('useDynamicView', False),
            ('useOtherLoadRulesForPolling', False),
            ('useUpdate', True),
            ('viewDrive', '/view'),
            ('viewName', scm.view_name),
            ('viewPath', scm.view_path),
            ('branch', ''),
            ('configSpec', '\n'.join(scm.config_spec)),
            ('configSpecFileName', ''),
            ('doNotUpdateConfigSpec', False),
            ('extractConfigSpec', False),
            ('label', ''),
            ('refreshConfigSpec', False),
            ('refreshConfigSpecCommand', ''),
            ('useTimeRule', False)]:
        node.append_node(label, value)
    return node


def rtc(scm, variant=versions.CURRENT):
    node = scm_node('rtc')
    node.append_node('overrideGlobal', scm.override_global)
    node.append_node('timeout', scm.timeout)
    if scm.override_global:
        node.append_node('buildTool', scm.build_tool)
        node.append_node('serverURI', scm.server_uri)
        node.append_node('credentialsId', scm.credentials_id)
    node.append_node('buildType', scm.build_type)
    if scm.build_type == 'buildDefinition':
        node.append_node('buildDefinition', scm.build_definition)
    else:
        node.append_node('buildWorkspace', scm.build_workspace)
    node.append_node('avoidUsingToolkit', False)
    return node


def workspace(scm, variant=versions.CURRENT):
    node = scm_node('workspace')
    mapping = [
        ('parent_project', 'parentJobName', None),
        ('criteria', 'criteria', 'Any'),
    ]
    helpers.convert_mapping_to_node(node, vars(scm), mapping)
    return node


SYNTHESIZERS = {
    'git': git,
    'hg': hg,
    'svn': svn,
    'p4': p4,
    'clearcase': clearcase,
    'rtc': rtc,
    'workspace': workspace,
}


class SCM(object):
    """Fold a list of scm trees into the ``scm`` element of a job."""

    component_type = 'scm'

    MULTI_SCM_CLASS = 'org.jenkinsci.plugins.multiplescms.MultiSCM'

    def render(self, scm_nodes):
        scm_count = len(scm_nodes)
        if scm_count == 0:
            return Node('scm', {'class': 'hudson.scm.NullSCM'})
        if scm_count == 1:
            return scm_nodes[0]

        root = Node('scm', {'class': self.MULTI_SCM_CLASS})
        scms = SubNode(root, 'scms')
        for child in scm_nodes:
            attributes = dict(child.attributes)
            label = attributes.pop('class', child.label)
            scms.append(Node(label, attributes, child.children, child.value))
        return root
