"""Tests for collection lifecycle and the store factory."""

from __future__ import annotations

import unittest
from unittest import mock

from chroma_collections.client import CollectionClient
from chroma_collections.config import AppConfig, StoreConfig
from chroma_collections.document import DistanceMetric
from chroma_collections.store.chromadb_impl import ChromaStoreClient
from chroma_collections.store.factory import create_store_client
from chroma_collections.store.memory_impl import InMemoryStoreClient


class CollectionClientTests(unittest.TestCase):
    def setUp(self) -> None:
        self.client = CollectionClient(InMemoryStoreClient())

    def test_create_records_distance_metric(self) -> None:
        collection = self.client.create_collection("docs", "cosine", metadata={"owner": "tests"})

        self.assertEqual(collection.name, "docs")
        self.assertIs(collection.distance_metric, DistanceMetric.COSINE)
        self.assertEqual(collection.handle.metadata, {"owner": "tests", "hnsw:space": "cosine"})

    def test_get_reads_metric_back(self) -> None:
        self.client.create_collection("docs", DistanceMetric.IP)

        collection = self.client.get_collection("docs")

        self.assertIs(collection.distance_metric, DistanceMetric.IP)

    def test_get_defaults_to_l2_without_metadata(self) -> None:
        store = mock.Mock()
        store.get_collection.return_value = mock.Mock(metadata=None)

        collection = CollectionClient(store).get_collection("legacy")

        self.assertIs(collection.distance_metric, DistanceMetric.L2)

    def test_unknown_metric_rejected_before_store_call(self) -> None:
        store = mock.Mock()
        with self.assertRaises(ValueError):
            CollectionClient(store).create_collection("docs", "manhattan")
        store.create_collection.assert_not_called()

    def test_delete_list_heartbeat_reset(self) -> None:
        self.client.create_collection("a")
        self.client.create_collection("b")
        self.client.delete_collection("a")

        self.assertEqual(self.client.list_collections(), ["b"])
        self.assertGreater(self.client.heartbeat(), 0)
        self.assertTrue(self.client.reset())
        self.assertEqual(self.client.list_collections(), [])


class StoreFactoryTests(unittest.TestCase):
    def test_memory_backend(self) -> None:
        store = create_store_client(AppConfig(store=StoreConfig(backend="memory")))
        self.assertIsInstance(store, InMemoryStoreClient)

    @mock.patch("chroma_collections.store.chromadb_impl.chromadb.HttpClient")
    def test_chroma_backend(self, mock_http_client) -> None:
        config = AppConfig(store=StoreConfig(backend="chroma", host="chroma.local", port=9000, ssl=True))

        store = create_store_client(config)

        self.assertIsInstance(store, ChromaStoreClient)
        kwargs = mock_http_client.call_args.kwargs
        self.assertEqual(kwargs["host"], "chroma.local")
        self.assertEqual(kwargs["port"], 9000)
        self.assertTrue(kwargs["ssl"])

    def test_unknown_backend(self) -> None:
        with self.assertRaises(ValueError):
            create_store_client(AppConfig(store=StoreConfig(backend="faiss")))

    def test_from_config(self) -> None:
        client = CollectionClient.from_config(AppConfig(store=StoreConfig(backend="memory")))
        self.assertIsInstance(client.store, InMemoryStoreClient)


class ChromaStoreClientTests(unittest.TestCase):
    def setUp(self) -> None:
        patcher = mock.patch("chroma_collections.store.chromadb_impl.chromadb.HttpClient")
        self.mock_http_client = patcher.start()
        self.addCleanup(patcher.stop)
        self.chroma = self.mock_http_client.return_value
        self.store = ChromaStoreClient("localhost", 8000)

    def test_create_collection_passes_metadata(self) -> None:
        client = CollectionClient(self.store)
        self.chroma.create_collection.return_value = mock.Mock(metadata={"hnsw:space": "l2"})

        collection = client.create_collection("collections-unit-test", "l2")

        self.chroma.create_collection.assert_called_once_with(
            name="collections-unit-test",
            metadata={"hnsw:space": "l2"},
            embedding_function=None,
        )
        self.assertIs(collection.handle, self.chroma.create_collection.return_value)

    def test_delete_and_get_collection(self) -> None:
        self.store.delete_collection("docs")
        self.chroma.delete_collection.assert_called_once_with(name="docs")

        self.store.get_collection("docs")
        self.chroma.get_collection.assert_called_once_with(name="docs", embedding_function=None)

    def test_list_collections_accepts_names_or_objects(self) -> None:
        named = mock.Mock()
        named.name = "b"
        self.chroma.list_collections.return_value = ["a", named]

        self.assertEqual(self.store.list_collections(), ["a", "b"])

    def test_errors_pass_through(self) -> None:
        self.chroma.get_collection.side_effect = ValueError("Collection docs does not exist.")

        with self.assertRaises(ValueError) as ctx:
            self.store.get_collection("docs")
        self.assertEqual(str(ctx.exception), "Collection docs does not exist.")


if __name__ == "__main__":
    unittest.main()
