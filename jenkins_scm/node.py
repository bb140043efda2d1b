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

# Generic configuration tree produced by the SCM modules.

import xml.etree.ElementTree as XML

__all__ = [
    "Node",
    "SubNode",
]


def render_value(value):
    """Convert a scalar node value into the text Jenkins expects."""
    if value is None:
        return None
    if isinstance(value, bool):
        return str(value).lower()
    return str(value)


class Node(object):
    """A labeled tree node with attributes, ordered children and an
    optional scalar value.

    Children order is significant: Jenkins deserializes the configuration
    in schema order, so the order in which children are appended is the
    order in which they are rendered.

    :arg str label: the node label (XML tag), must not be empty
    :arg dict attributes: node attributes (optional)
    :arg list children: initial child nodes (optional)
    :arg value: scalar value of the node (optional)
    """

    def __init__(self, label, attributes=None, children=None, value=None):
        if not label:
            raise ValueError("Node label must be a non-empty string")
        self.label = label
        self.attributes = dict(attributes or {})
        self.children = list(children or [])
        self.value = value

    def __repr__(self):
        return "Node(%r, %r, value=%r, children=%d)" % (
            self.label, self.attributes, self.value, len(self.children))

    def __eq__(self, other):
        if not isinstance(other, Node):
            return NotImplemented
        return (self.label == other.label and
                self.attributes == other.attributes and
                self.value == other.value and
                self.children == other.children)

    def __ne__(self, other):
        result = self.__eq__(other)
        if result is NotImplemented:
            return result
        return not result

    __hash__ = None

    def __iter__(self):
        return iter(self.children)

    def __len__(self):
        return len(self.children)

    def __getitem__(self, index):
        return self.children[index]

    def append(self, child):
        if not isinstance(child, Node):
            raise TypeError("Only Node instances can be appended, got %r"
                            % (child,))
        self.children.append(child)
        return child

    def extend(self, children):
        for child in children:
            self.append(child)

    def remove(self, child):
        self.children.remove(child)

    def append_node(self, label, value=None, attributes=None):
        """Create a child node, append it and return it."""
        return self.append(Node(label, attributes, value=value))

    def find(self, label):
        """Return the first direct child with the given label or None."""
        for child in self.children:
            if child.label == label:
                return child
        return None

    def findall(self, label):
        return [child for child in self.children if child.label == label]

    def labels(self):
        return [child.label for child in self.children]

    def to_xml(self):
        """Convert the tree into an ElementTree element."""
        element = XML.Element(self.label, self.attributes)
        text = render_value(self.value)
        if text is not None:
            element.text = text
        for child in self.children:
            element.append(child.to_xml())
        return element


def SubNode(parent, label, attributes=None, value=None):
    """Counterpart of ``xml.etree.ElementTree.SubElement`` for Nodes."""
    return parent.append(Node(label, attributes, value=value))
