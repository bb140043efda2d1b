"""Pytest collection support for testscenarios-based test cases.

stestr/unittest expand ``scenarios`` at run time via
``testscenarios.WithScenarios.run``. pytest binds the test method of the
original instance before calling ``run``, so the per-scenario clones end up
executing against the un-parametrized original. Expand the scenarios at
collection time instead: one collected class per scenario, with the scenario
attributes applied to each instance just like ``testscenarios.apply_scenario``.
"""

import inspect
import unittest

from _pytest.unittest import UnitTestCase
from testscenarios.testcase import WithScenarios


def _scenario_class(cls, scenario_name, parameters):
    def __init__(self, *args, **kwargs):
        cls.__init__(self, *args, **kwargs)
        for key, value in parameters.items():
            setattr(self, key, value)

    return type(
        "%s[%s]" % (cls.__name__, scenario_name),
        (cls,),
        {
            "__init__": __init__,
            "__module__": cls.__module__,
            "__qualname__": cls.__qualname__,
            "scenarios": None,
        },
    )


def pytest_pycollect_makeitem(collector, name, obj):
    if not (inspect.isclass(obj)
            and issubclass(obj, unittest.TestCase)
            and issubclass(obj, WithScenarios)):
        return None
    scenarios = getattr(obj, "scenarios", None)
    if not scenarios:
        return None
    items = []
    for scenario_name, parameters in scenarios:
        item = UnitTestCase.from_parent(
            collector, name="%s[%s]" % (name, scenario_name))
        item.obj = _scenario_class(obj, scenario_name, parameters)
        items.append(item)
    return items
