import sys
import unittest
from pathlib import Path

TESTS_ROOT = Path(__file__).resolve().parent
sys.path.insert(0, str(TESTS_ROOT.parent / "src"))
sys.path.insert(0, str(TESTS_ROOT))

from fake_sdk.client import AmbiguousClient, Client, SyncOnlyClient  # noqa: E402
from fake_sdk.requests import ActionRequest, GetRequest, IndexRequest, NoSetterRequest  # noqa: E402
from fake_sdk.responses import ClusterHealthResponse, IndexResponse, OpaqueResponse  # noqa: E402
from reflex_client.errors import ConfigurationError  # noqa: E402
from reflex_client.introspect import (  # noqa: E402
    ITERATOR_FIELD,
    field_extractors,
    find_execute_method,
    gettable_methods,
    resolve_class,
    settable_methods,
    takes_boolean,
)


class TestResolveClass(unittest.TestCase):
    def test_dotted_and_colon_paths(self) -> None:
        self.assertIs(resolve_class("fake_sdk.requests.GetRequest"), GetRequest)
        self.assertIs(resolve_class("fake_sdk.requests:GetRequest"), GetRequest)

    def test_relative_path_uses_package(self) -> None:
        self.assertIs(resolve_class(".requests.GetRequest", package="fake_sdk"), GetRequest)

    def test_relative_path_without_package(self) -> None:
        with self.assertRaises(ConfigurationError):
            resolve_class(".requests.GetRequest")

    def test_unresolvable_paths(self) -> None:
        for path in ("fake_sdk.missing.GetRequest", "fake_sdk.requests.Nope", "GetRequest"):
            with self.subTest(path=path):
                with self.assertRaises(ConfigurationError):
                    resolve_class(path)

    def test_non_class_target(self) -> None:
        with self.assertRaises(ConfigurationError):
            resolve_class("fake_sdk.catalog.PACKAGE")


class TestSettableMethods(unittest.TestCase):
    def test_discovers_fluent_setters(self) -> None:
        names = set(settable_methods(GetRequest))
        self.assertEqual(
            names,
            {"fields", "id", "index", "operation_threaded", "realtime", "setRefresh", "setRouting", "type"},
        )

    def test_excludes_other_shapes(self) -> None:
        names = set(settable_methods(GetRequest))
        # zero-arity accessor, two-argument method, unrelated return types
        for excluded in ("getIndex", "copy_with", "describe", "validate"):
            self.assertNotIn(excluded, names)

    def test_inherited_setter_must_return_immediate_base(self) -> None:
        self.assertIn("operation_threaded", settable_methods(IndexRequest))
        self.assertIn("operation_threaded", settable_methods(ActionRequest))

    def test_boolean_parameters(self) -> None:
        setters = settable_methods(GetRequest)
        self.assertTrue(takes_boolean(GetRequest, setters["realtime"]))
        self.assertTrue(takes_boolean(GetRequest, setters["setRefresh"]))
        self.assertFalse(takes_boolean(GetRequest, setters["id"]))

    def test_type_without_setters(self) -> None:
        self.assertEqual(settable_methods(NoSetterRequest), {})


class TestGettableMethods(unittest.TestCase):
    def test_denylist_is_excluded(self) -> None:
        names = set(gettable_methods(IndexResponse))
        self.assertEqual(names, {"getId", "getIndex", "getType", "getVersion"})

    def test_iterable_types_get_an_iterator_field(self) -> None:
        extractors = field_extractors(ClusterHealthResponse)
        self.assertIn(ITERATOR_FIELD, extractors)
        self.assertIn("cluster-name", extractors)
        response = ClusterHealthResponse(cluster_name="c", status="green", indices={"b": {}, "a": {}})
        self.assertEqual(extractors[ITERATOR_FIELD](response), ["a", "b"])

    def test_type_without_getters_is_a_configuration_error(self) -> None:
        with self.assertRaises(ConfigurationError):
            field_extractors(OpaqueResponse)


class TestFindExecuteMethod(unittest.TestCase):
    def test_unique_match(self) -> None:
        execute = find_execute_method(GetRequest, Client)
        self.assertEqual(execute.name, "get")
        self.assertTrue(execute.accepts_listener)

    def test_sync_only_method(self) -> None:
        execute = find_execute_method(GetRequest, SyncOnlyClient)
        self.assertEqual(execute.name, "get")
        self.assertFalse(execute.accepts_listener)

    def test_no_match(self) -> None:
        with self.assertRaises(ConfigurationError) as ctx:
            find_execute_method(NoSetterRequest, Client)
        self.assertIn("no execute method", str(ctx.exception))

    def test_several_matches(self) -> None:
        with self.assertRaises(ConfigurationError) as ctx:
            find_execute_method(GetRequest, AmbiguousClient)
        self.assertIn("fetch, get", str(ctx.exception))


if __name__ == "__main__":
    unittest.main()
