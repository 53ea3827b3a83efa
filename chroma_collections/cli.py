"""Command line access to collections: create, add, get, query and friends."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Any, Dict, List, Optional, Sequence

from chromadb.errors import ChromaError

from .client import CollectionClient
from .config import AppConfig, load_config
from .document import DistanceMetric, Document
from .embeddings.openai import OpenAIEmbedder
from .errors import ChromaCollectionsError
from .log_setup import setup_logging

logger = logging.getLogger("chroma_collections.cli")


def _parse_value(raw: str) -> Any:
    try:
        return json.loads(raw)
    except ValueError:
        return raw


def _parse_pairs(pairs: Optional[List[str]]) -> Optional[Dict[str, Any]]:
    """Turn ``key=value`` arguments into a mapping; ``None`` when none given."""

    if not pairs:
        return None
    parsed: Dict[str, Any] = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep or not key:
            raise ValueError(f"Expected key=value, got {pair!r}")
        parsed[key] = _parse_value(value)
    return parsed


def _where_document(contains: Optional[str]) -> Optional[Dict[str, Any]]:
    return {"$contains": contains} if contains else None


def _print_documents(documents: Sequence[Document]) -> None:
    if not documents:
        print("No documents found.")
        return
    for doc in documents:
        distance = f" distance={doc.distance:.4f}" if doc.distance is not None else ""
        print(f"- {doc.id}{distance} metadata={json.dumps(doc.metadata, sort_keys=True)}")
        if doc.content:
            print(f"  {doc.content}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="chroma-collections", description=__doc__)
    parser.add_argument("--config", help="Path to a chroma_collections.toml file")
    parser.add_argument("--log-level", help="Override the configured log level")
    sub = parser.add_subparsers(dest="command", required=True)

    create = sub.add_parser("create", help="Create a collection")
    create.add_argument("name")
    create.add_argument("--distance", choices=[metric.value for metric in DistanceMetric])

    delete = sub.add_parser("delete", help="Delete a collection")
    delete.add_argument("name")

    sub.add_parser("list", help="List collection names")

    add = sub.add_parser("add", help="Embed and add one document")
    add.add_argument("name")
    add.add_argument("--id", required=True, dest="doc_id")
    add.add_argument("--text", required=True)
    add.add_argument("--meta", action="append", metavar="KEY=VALUE")

    get = sub.add_parser("get", help="Fetch documents by id and filters")
    get.add_argument("name")
    get.add_argument("--id", action="append", dest="ids")
    get.add_argument("--where", action="append", metavar="KEY=VALUE")
    get.add_argument("--contains")

    query = sub.add_parser("query", help="Similarity search; empty text filters only")
    query.add_argument("name")
    query.add_argument("text", nargs="?", default="")
    query.add_argument("-n", "--n-results", type=int, default=5)
    query.add_argument("--where", action="append", metavar="KEY=VALUE")
    query.add_argument("--contains")

    count = sub.add_parser("count", help="Count documents in a collection")
    count.add_argument("name")
    return parser


def run(args: argparse.Namespace, config: AppConfig, client: CollectionClient) -> int:
    if args.command == "create":
        distance = args.distance or config.store.default_distance
        client.create_collection(args.name, distance)
        print(f"Created collection {args.name} ({distance})")
    elif args.command == "delete":
        client.delete_collection(args.name)
        print(f"Deleted collection {args.name}")
    elif args.command == "list":
        for name in client.list_collections():
            print(name)
    elif args.command == "add":
        document = Document(id=args.doc_id, content=args.text, metadata=_parse_pairs(args.meta) or {})
        client.get_collection(args.name).add([document], OpenAIEmbedder.from_config(config))
        print(f"Added {args.doc_id} to {args.name}")
    elif args.command == "get":
        documents = client.get_collection(args.name).get(
            ids=args.ids,
            where=_parse_pairs(args.where),
            where_document=_where_document(args.contains),
        )
        _print_documents(documents)
    elif args.command == "query":
        collection = client.get_collection(args.name)
        embedder = OpenAIEmbedder.from_config(config) if args.text else None
        documents = collection.query(
            args.text,
            args.n_results,
            where=_parse_pairs(args.where),
            where_document=_where_document(args.contains),
            embedder=embedder,
        )
        _print_documents(documents)
    elif args.command == "count":
        print(client.get_collection(args.name).count())
    return 0


def main(argv: Optional[Sequence[str]] = None, client: Optional[CollectionClient] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    config = load_config(args.config)
    setup_logging(args.log_level, config=config)
    try:
        client = client or CollectionClient.from_config(config)
        return run(args, config, client)
    except (ChromaCollectionsError, ChromaError, ValueError) as exc:
        logger.debug("Command failed", exc_info=True)
        print(f"Error: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
