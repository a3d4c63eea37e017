import sys
import unittest
from pathlib import Path

TESTS_ROOT = Path(__file__).resolve().parent
sys.path.insert(0, str(TESTS_ROOT.parent / "src"))
sys.path.insert(0, str(TESTS_ROOT))

from fake_sdk import catalog as fake_catalog  # noqa: E402
from fake_sdk.client import Client  # noqa: E402
from fake_sdk.responses import IndexResponse  # noqa: E402
from reflex_client import catalog  # noqa: E402
from reflex_client.api import build_api  # noqa: E402
from reflex_client.catalog import RequestDescriptor, ResponseDescriptor  # noqa: E402
from reflex_client.categories import ClientCategory  # noqa: E402
from reflex_client.connection import using_client  # noqa: E402
from reflex_client.errors import ConfigurationError  # noqa: E402


def _build(requests=fake_catalog.REQUESTS, responses=fake_catalog.RESPONSES, **kwargs):
    return build_api(requests, responses, package=fake_catalog.PACKAGE, **kwargs)


class TestBuildApi(unittest.TestCase):
    def setUp(self) -> None:
        self.api = _build()
        self.client = Client()

    def test_operations_by_name_and_attribute(self) -> None:
        self.assertEqual(
            sorted(self.api),
            ["cluster-health", "create-index", "get-doc", "index-doc", "search"],
        )
        self.assertIs(self.api.get_doc, self.api["get-doc"])
        self.assertIn("search", self.api)
        self.assertEqual(len(self.api), 5)
        with self.assertRaises(AttributeError):
            self.api.missing_operation

    def test_operation_table_is_read_only(self) -> None:
        with self.assertRaises(TypeError):
            self.api.operations["other"] = self.api["search"]  # type: ignore[index]
        with self.assertRaises(ConfigurationError):
            self.api.converters.register_strategy(IndexResponse, "object")

    def test_index_then_get(self) -> None:
        indexed = self.api.index_doc(
            self.client,
            {"index": "a", "type": "doc", "id": "1", "source": {"title": "t", "tags": ["x", "y"]}, "refresh?": True},
        )
        self.assertEqual(indexed, {"index": "a", "type": "doc", "id": "1", "version": 1})

        with using_client(self.client):
            found = self.api.get_doc({"index": "a", "type": "doc", "id": "1"})
        self.assertEqual(found["_version"], 1)
        self.assertEqual(found["_source"], {"title": "t", "tags": ["x", "y"]})

    def test_existing_document_without_source(self) -> None:
        self.client.store("a", "doc", "1", None)
        result = self.api.get_doc(self.client, {"index": "a", "type": "doc", "id": "1", "format": "structured"})
        self.assertEqual(result["_index"], "a")
        self.assertEqual(result["_id"], "1")
        self.assertNotIn("_source", result)

    def test_api_convert(self) -> None:
        response = IndexResponse("a", "doc", "1", 2)
        self.assertEqual(self.api.convert(response)["version"], 2)
        self.assertIs(self.api.convert(response, "native"), response)


class TestBuildApiConfigurationErrors(unittest.TestCase):
    def test_unresolvable_request_class(self) -> None:
        requests = fake_catalog.REQUESTS + (
            RequestDescriptor("ghost", ".requests.GhostRequest", (), ClientCategory.CORE),
        )
        with self.assertRaises(ConfigurationError):
            _build(requests)

    def test_request_without_setters(self) -> None:
        requests = (RequestDescriptor("no-setters", ".requests.NoSetterRequest", ("name",), ClientCategory.CORE),)
        with self.assertRaises(ConfigurationError):
            _build(requests)

    def test_duplicate_operation_names(self) -> None:
        requests = fake_catalog.REQUESTS[:1] * 2
        with self.assertRaises(ConfigurationError):
            _build(requests)

    def test_missing_empty_params_marker(self) -> None:
        responses = (ResponseDescriptor(".responses.UnmarkedXContentResponse", "xcontent"),)
        with self.assertRaises(ConfigurationError):
            _build(responses=responses)

    def test_missing_client_category(self) -> None:
        with self.assertRaises(ConfigurationError):
            _build(clients={ClientCategory.CORE: ".client.Client"})


class TestCatalog(unittest.TestCase):
    def test_operation_names_are_unique(self) -> None:
        names = [d.name for d in catalog.REQUESTS]
        self.assertEqual(len(names), len(set(names)))

    def test_every_category_has_a_client(self) -> None:
        for descriptor in catalog.REQUESTS:
            with self.subTest(name=descriptor.name):
                self.assertIn(descriptor.category, catalog.CLIENT_PATHS)
                self.assertTrue(descriptor.request_path.startswith("."))

    def test_response_strategies_are_known(self) -> None:
        from reflex_client.convert import STRATEGIES

        paths = [d.response_path for d in catalog.RESPONSES]
        self.assertEqual(len(paths), len(set(paths)))
        for descriptor in catalog.RESPONSES:
            self.assertIn(descriptor.strategy, STRATEGIES)

    def test_get_doc_takes_index(self) -> None:
        get_doc = next(d for d in catalog.CORE_REQUESTS if d.name == "get-doc")
        self.assertEqual(get_doc.constructor_keys, ("index",))


if __name__ == "__main__":
    unittest.main()
