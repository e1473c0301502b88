import unittest

import pytest

from litedim import ROOT, Container, MissingServiceError


class TestChildContainerBehavior(unittest.TestCase):
    parent: Container
    child: Container

    def setUp(self):
        self.parent = Container()
        self.child = Container(self.parent)

    def test_default_parent_is_root(self):
        assert self.parent.parent is ROOT

    def test_parent_accessor_returns_immediate_parent(self):
        grandchild = Container(self.child)
        assert grandchild.parent is self.child
        assert self.child.parent is self.parent

    def test_child_reuses_service_from_parent(self):
        self.parent.register("gene", lambda: "x")

        assert self.child.gene == "x"

    def test_child_registration_overrides_parent_registration(self):
        self.parent.register("gene", lambda: "x")
        self.child.register("gene", lambda: "y")

        assert self.child.gene == "y"

    def test_child_overrides_indirect_dependency(self):
        self.parent.register("thing", lambda c: c.real_thing)
        self.parent.register("real_thing", lambda: "THING")
        self.child.register("real_thing", lambda: "NEWTHING")

        assert self.child.thing == "NEWTHING"
        assert self.parent.thing == "THING"

    def test_parent_is_unaffected_by_child_registrations(self):
        self.parent.register("gene", lambda: "x")
        self.child.register("gene", lambda: "y")

        assert self.parent.gene == "x"

    def test_multiple_children_do_not_interfere_with_each_other(self):
        self.parent.register("gene", lambda: "x")
        a = Container(self.parent)
        b = Container(self.parent)
        a.register("gene", lambda: "a")
        b.register("gene", lambda: "b")

        assert a.gene == "a"
        assert b.gene == "b"
        assert self.parent.gene == "x"

    def test_service_from_parent_factory_is_cached_in_child_only(self):
        class Service: ...

        self.parent.register("service", lambda: Service())

        from_child = self.child.service
        assert self.child.service is from_child
        assert self.parent.service is not from_child

    def test_siblings_build_their_own_instances(self):
        class Service: ...

        self.parent.register("service", lambda: Service())
        sibling = Container(self.parent)

        assert self.child.service is not sibling.service

    def test_lookup_walks_whole_chain(self):
        grandchild = Container(self.child)
        self.parent.register("db", lambda: "postgres")

        assert grandchild.db == "postgres"

    def test_factory_from_grandparent_sees_originating_container(self):
        grandchild = Container(self.child)
        self.parent.register("url", lambda c: f"{c.scheme}://host")
        self.parent.register("scheme", lambda: "http")
        self.child.register("scheme", lambda: "https")

        assert grandchild.url == "https://host"

    def test_child_may_wrap_parent_version_of_a_service(self):
        self.parent.register("cell", lambda: "cell")
        self.child.register("cell", lambda c: f"wrapped({c.parent.lookup('cell')})")

        assert self.child.cell == "wrapped(cell)"
        assert self.parent.cell == "cell"

    def test_unknown_name_fails_through_whole_chain(self):
        with pytest.raises(MissingServiceError) as ctx:
            self.child.lookup("nowhere")
        assert ctx.value.name == "nowhere"

    def test_child_lookup_does_not_fill_parent_cache(self):
        calls = []

        def make_gene():
            calls.append(1)
            return object()

        self.parent.register("gene", make_gene)
        self.child.gene  # noqa: B018
        self.parent.gene  # noqa: B018

        assert len(calls) == 2
