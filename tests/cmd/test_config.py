import io
import os
from unittest import mock

from jenkins_scm.cli import entry
from jenkins_scm import config
from jenkins_scm.errors import ScmBuilderConfigException
from tests.cmd.test_cmd import CmdTestsBase


class TestConfigs(CmdTestsBase):

    global_conf = '/etc/jenkins_scm/jenkins_scm.ini'
    user_conf = os.path.join(os.path.expanduser('~'), '.config',
                             'jenkins_scm', 'jenkins_scm.ini')

    def test_use_global_config(self):
        """
        Verify that jenkins-scm uses the global config file by default
        """

        args = ['test', 'foo']
        conffp = io.open(self.default_config_file, 'r', encoding='utf-8')

        with mock.patch('os.path.isfile', return_value=True) as m_isfile:
            def side_effect(path):
                if path == self.global_conf:
                    return True
                return False

            m_isfile.side_effect = side_effect

            with mock.patch('io.open', return_value=conffp) as m_open:
                entry.JenkinsScm(args, config_file_required=True)
                m_open.assert_called_with(self.global_conf, 'r',
                                          encoding='utf-8')

    def test_use_config_in_user_home(self):
        """
        Verify that jenkins-scm uses config file in user home folder
        """

        args = ['test', 'foo']

        conffp = io.open(self.default_config_file, 'r', encoding='utf-8')
        with mock.patch('os.path.isfile', return_value=True) as m_isfile:
            def side_effect(path):
                if path == self.user_conf:
                    return True
                return False

            m_isfile.side_effect = side_effect
            with mock.patch('io.open', return_value=conffp) as m_open:
                entry.JenkinsScm(args, config_file_required=True)
                m_open.assert_called_with(self.user_conf, 'r',
                                          encoding='utf-8')

    def test_missing_required_config(self):
        args = ['--conf', os.path.join(self.fixtures_path, 'missing.ini'),
                'test', 'foo']
        e = self.assertRaises(ScmBuilderConfigException, entry.JenkinsScm,
                              args, config_file_required=True)
        self.assertIn("A valid configuration file is required", str(e))

    def test_missing_config_uses_defaults(self):
        conf = os.path.join(self.fixtures_path, 'missing.ini')
        scm_config = config.ScmBuilderConfig(conf)

        self.assertFalse(scm_config.builder['allow_multiscm'])
        self.assertIsNone(scm_config.builder['plugins_info'])
        self.assertFalse(scm_config.yamlparser['allow_duplicates'])
        self.assertIn("Config file, {0}, not found".format(conf),
                      self.logger.output)

    def test_config_options_from_file(self):
        """
        Run test mode and check config settings from conf file retained
        when none of the global CLI options are set.
        """
        config_file = os.path.join(self.fixtures_path,
                                   'settings_from_config.ini')
        args = ['--conf', config_file, 'test', 'dummy.yaml']
        jenkins_scm = entry.JenkinsScm(args)
        scm_config = jenkins_scm.config
        self.assertEqual(scm_config.builder['allow_multiscm'], True)
        self.assertEqual(scm_config.yamlparser['allow_duplicates'], True)

    def test_invalid_boolean(self):
        config_file = os.path.join(self.fixtures_path, 'invalid_boolean.ini')
        e = self.assertRaises(ScmBuilderConfigException,
                              config.ScmBuilderConfig, config_file)
        self.assertIn("allow_multiscm", str(e))

    def test_plugins_info_must_be_a_list(self):
        path = os.path.join(self.fixtures_path, 'plugins-info-invalid.yaml')
        e = self.assertRaises(ScmBuilderConfigException,
                              config.load_plugins_info, path)
        self.assertIn("must contain a Yaml list", str(e))
