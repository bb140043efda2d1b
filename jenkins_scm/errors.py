"""Exception classes for jenkins_scm errors"""

import inspect


def is_sequence(arg):
    return (not hasattr(arg, "strip") and
            (hasattr(arg, "__getitem__") or
             hasattr(arg, "__iter__")))


class JenkinsScmException(Exception):
    pass


class ModuleError(JenkinsScmException):

    def get_module_name(self):
        frame = inspect.currentframe()
        module_name = '<unresolved>'
        while frame:
            co_name = frame.f_code.co_name
            # component dispatched from YAML data
            if co_name == 'dispatch' and 'name' in frame.f_locals:
                data = frame.f_locals
                module_name = "%s.%s" % (data['component_type'], data['name'])
                break
            # component added directly through the ScmContext api
            if co_name == '_add' and 'kind' in frame.f_locals:
                module_name = "scm.%s" % frame.f_locals['kind']
                break
            frame = frame.f_back

        return module_name


class InvariantViolationError(ModuleError):
    pass


class InvalidAttributeError(InvariantViolationError):

    def __init__(self, attribute_name, value, valid_values=None,
                 module_name=None):
        module = module_name or self.get_module_name()
        message = "'{0}' is an invalid value for attribute {1}.{2}".format(
            value, module, attribute_name)

        if is_sequence(valid_values):
            message += "\nValid values include: {0}".format(
                ', '.join("'{0}'".format(value)
                          for value in valid_values))

        super(InvalidAttributeError, self).__init__(message)


class MultipleScmError(InvariantViolationError):

    def __init__(self, count):
        message = ('Outside of multiscm mode only one SCM can be specified, '
                   '{0} already defined'.format(count))
        super(MultipleScmError, self).__init__(message)


class MissingAttributeError(ModuleError):

    def __init__(self, missing_attribute, module_name=None):
        module = module_name or self.get_module_name()
        if is_sequence(missing_attribute):
            message = "One of {0} must be present in '{1}'".format(
                ', '.join("'{0}'".format(value)
                          for value in missing_attribute), module)
        else:
            message = "Missing {0} from an instance of '{1}'".format(
                missing_attribute, module)

        super(MissingAttributeError, self).__init__(message)


class AttributeConflictError(ModuleError):

    def __init__(
        self, attribute_name, attributes_in_conflict, module_name=None
    ):
        module = module_name or self.get_module_name()
        message = (
            "Attribute '{0}' can not be used together with {1} in {2}".format(
                attribute_name,
                ', '.join(
                    "'{0}'".format(value) for value in attributes_in_conflict
                ), module
            )
        )

        super(AttributeConflictError, self).__init__(message)


class UnsupportedCombinationError(ModuleError):

    def __init__(self, attributes, module_name=None):
        module = module_name or self.get_module_name()
        message = "Exactly one of {0} must be set in '{1}'".format(
            ', '.join("'{0}'".format(value) for value in attributes), module)

        super(UnsupportedCombinationError, self).__init__(message)


class YAMLFormatError(JenkinsScmException):
    pass


class ScmBuilderConfigException(JenkinsScmException):
    pass
