from testtools import ExpectedException

from jenkins_scm import errors
from tests import base


def dispatch(exc, *args):
    component_type = "scm"  # noqa
    name = "git"

    for value in [component_type, name]:
        # prevent pep8 F841 "Unused Variable"
        pass

    raise exc(*args)


def _add(exc, *args):
    kind = "svn"  # noqa

    raise exc(*args)


def render(exc, *args):
    data = {'module': 'data'}  # noqa

    raise exc(*args)


class TestInvalidAttributeError(base.BaseTestCase):

    def test_no_valid_values(self):
        # When given no valid values, InvalidAttributeError simply displays a
        # message indicating the invalid value, the component type, the
        # component name, and the attribute name.
        message = "'{0}' is an invalid value for attribute {1}.{2}".format(
            "fnord", "scm.git", "fubar")
        with ExpectedException(errors.InvalidAttributeError, message):
            dispatch(errors.InvalidAttributeError, "fubar", "fnord")

    def test_with_valid_values(self):
        # When given valid values, InvalidAttributeError also lists them.
        valid_values = ['herp', 'derp']
        message = "'{0}' is an invalid value for attribute {1}.{2}".format(
            "fnord", "scm.git", "fubar")
        message += "\nValid values include: {0}".format(
            ', '.join("'{0}'".format(value) for value in valid_values))

        with ExpectedException(errors.InvalidAttributeError, message):
            dispatch(errors.InvalidAttributeError, "fubar", "fnord",
                     valid_values)

    def test_explicit_module_name(self):
        exc = self.assertRaises(errors.InvalidAttributeError, dispatch,
                                errors.InvalidAttributeError, 'protocol',
                                'ftp', None, 'scm.github')
        self.assertEqual(
            "'ftp' is an invalid value for attribute scm.github.protocol",
            str(exc))

    def test_added_through_context(self):
        exc = self.assertRaises(errors.InvalidAttributeError, _add,
                                errors.InvalidAttributeError, 'repo-depth',
                                'deep')
        self.assertEqual(
            "'deep' is an invalid value for attribute scm.svn.repo-depth",
            str(exc))


class TestMissingAttributeError(base.BaseTestCase):

    def test_with_single_missing_attribute(self):
        # When passed a single missing attribute, display a message indicating
        #  * the missing attribute
        #  * which component type and component name is missing it.
        missing_attribute = 'herp'
        message = "Missing {0} from an instance of '{1}'".format(
            missing_attribute, 'scm.git')

        with ExpectedException(errors.MissingAttributeError, message):
            dispatch(errors.MissingAttributeError, missing_attribute)

        with ExpectedException(errors.MissingAttributeError,
                               message.replace('scm.git', 'scm.svn')):
            _add(errors.MissingAttributeError, missing_attribute)

        exc = self.assertRaises(errors.MissingAttributeError, render,
                                errors.MissingAttributeError,
                                missing_attribute)
        self.assertEqual(
            message.replace('scm.git', '<unresolved>'), str(exc))

    def test_with_multiple_missing_attributes(self):
        # When passed multiple missing attributes, display a message indicating
        #  * the missing attributes
        #  * which component type and component name is missing it.
        missing_attribute = ['herp', 'derp']
        message = "One of {0} must be present in '{1}'".format(
            ', '.join("'{0}'".format(value) for value in missing_attribute),
            'scm.git')

        with ExpectedException(errors.MissingAttributeError, message):
            dispatch(errors.MissingAttributeError, missing_attribute)

        with ExpectedException(errors.MissingAttributeError,
                               message.replace('scm.git', 'scm.svn')):
            _add(errors.MissingAttributeError, missing_attribute)


class TestConflictErrors(base.BaseTestCase):

    def test_attribute_conflict(self):
        exc = self.assertRaises(errors.AttributeConflictError, _add,
                                errors.AttributeConflictError, 'tag',
                                ['branch'])
        self.assertEqual(
            "Attribute 'tag' can not be used together with 'branch' in "
            "scm.svn", str(exc))

    def test_unsupported_combination(self):
        exc = self.assertRaises(errors.UnsupportedCombinationError, dispatch,
                                errors.UnsupportedCombinationError,
                                ['build-definition', 'build-workspace'])
        self.assertEqual(
            "Exactly one of 'build-definition', 'build-workspace' must be "
            "set in 'scm.git'", str(exc))

    def test_multiple_scm(self):
        exc = errors.MultipleScmError(1)
        self.assertIsInstance(exc, errors.InvariantViolationError)
        self.assertEqual('Outside of multiscm mode only one SCM can be '
                         'specified, 1 already defined', str(exc))
