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

# Base class for a jenkins_scm descriptor

import copy


class Base(object):
    """
    A base class for the configuration of one SCM or one of its sub
    sections.

    Descriptors are plain mutable objects. They can be created with keyword
    arguments using the attribute names, or from YAML data using the option
    names declared in ``mapping``.
    """

    #: The scm kind handled by this descriptor (e.g. ``git``). Sub section
    #: descriptors leave it unset.
    kind = None

    #: The Jenkins plugin providing the SCM.
    plugin = None

    #: Tuples containing: YAML option name, attribute name, default value.
    #: Mutable defaults are copied for every instance.
    mapping = []

    def __init__(self, **kwargs):
        for _, attr, default in self.mapping:
            setattr(self, attr, copy.deepcopy(default))
        for attr, value in kwargs.items():
            if not self._has_attribute(attr):
                raise TypeError("%s got an unexpected argument '%s'"
                                % (type(self).__name__, attr))
            setattr(self, attr, value)

    @classmethod
    def _has_attribute(cls, attr):
        return any(attr == name for _, name, _ in cls.mapping)

    @classmethod
    def from_data(cls, data):
        """Create a descriptor from the YAML data of a component.

        Options that are not declared in ``mapping`` are ignored.
        """
        if data is None:
            data = {}
        kwargs = {}
        for optname, attr, _ in cls.mapping:
            if optname and optname in data:
                kwargs[attr] = data[optname]
        return cls(**kwargs)

    def validate(self):
        """Check the descriptor state before synthesis.

        Override this method to raise one of the
        :py:mod:`jenkins_scm.errors` module errors when the configuration
        can not be turned into a valid tree.
        """

        pass

    def __repr__(self):
        fields = ', '.join('%s=%r' % (attr, getattr(self, attr))
                           for _, attr, _ in self.mapping)
        return '%s(%s)' % (type(self).__name__, fields)
