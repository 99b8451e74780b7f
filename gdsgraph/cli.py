"""
Graph Client - Command-line interface for a graph service instance

Usage:
    python -m gdsgraph graphs
    python -m gdsgraph gremlin "g.V().has('name', name)" --bindings '{"name": "Alice"}'
    python -m gdsgraph --vcap load-graphson data.json

Credentials come from --api-url/--username/--password, the GRAPH_CLIENT_*
environment variables, or the Cloud Foundry binding (--vcap).
"""

import argparse
import json
from typing import Any, List, Optional

from gdsgraph.config import env
from gdsgraph.logger import cli_logger as logger

from .client import GraphClientConfig, GraphSyncClient
from .exceptions import GraphAPIError


def _print_json(value: Any) -> None:
  print(json.dumps(value, indent=2, default=str))


def build_parser() -> argparse.ArgumentParser:
  """Argument parser for all commands."""
  parser = argparse.ArgumentParser(prog="gdsgraph", description="Graph Client")
  parser.add_argument("--api-url", help="Service API URL ending in the graph id")
  parser.add_argument("--username", help="Service user name")
  parser.add_argument("--password", help="Service password")
  parser.add_argument(
    "--timeout",
    type=float,
    default=env.GRAPH_CLIENT_TIMEOUT,
    help="Request timeout in seconds",
  )
  parser.add_argument(
    "--vcap",
    action="store_true",
    help="Read credentials from the VCAP_SERVICES binding",
  )

  subparsers = parser.add_subparsers(dest="command", help="Available commands")

  subparsers.add_parser("graphs", help="List graphs")

  create_parser = subparsers.add_parser("create-graph", help="Create a graph")
  create_parser.add_argument("graph_id", nargs="?", help="Graph id (generated if omitted)")

  delete_parser = subparsers.add_parser("delete-graph", help="Delete a graph")
  delete_parser.add_argument("graph_id", help="Graph id")

  subparsers.add_parser("schema", help="Show the schema of the graph")

  gremlin_parser = subparsers.add_parser("gremlin", help="Run a Gremlin traversal")
  gremlin_parser.add_argument("query", help="Traversal, with the traversal source as g")
  gremlin_parser.add_argument("--bindings", help="Bindings as JSON object")

  vertex_parser = subparsers.add_parser("vertex", help="Show a vertex")
  vertex_parser.add_argument("id", help="Vertex id")

  edge_parser = subparsers.add_parser("edge", help="Show an edge")
  edge_parser.add_argument("id", help="Edge id")

  load_parser = subparsers.add_parser("load-graphson", help="Bulk load a GraphSON file")
  load_parser.add_argument("file", help="GraphSON file (at most 10MB)")

  return parser


def _create_client(args: argparse.Namespace) -> GraphSyncClient:
  overrides = {
    key: value
    for key, value in (
      ("api_url", args.api_url),
      ("username", args.username),
      ("password", args.password),
    )
    if value
  }
  if args.vcap:
    return GraphSyncClient.from_vcap_services(timeout=args.timeout, **overrides)

  config = GraphClientConfig.from_env().with_overrides(timeout=args.timeout)
  return GraphSyncClient(config=config, **overrides)


def _run_command(client: GraphSyncClient, args: argparse.Namespace) -> int:
  if args.command == "graphs":
    _print_json(client.get_graphs())

  elif args.command == "create-graph":
    _print_json({"graphId": client.create_graph(args.graph_id)})

  elif args.command == "delete-graph":
    deleted = client.delete_graph(args.graph_id)
    _print_json({"graphId": args.graph_id, "deleted": deleted})

  elif args.command == "schema":
    _print_json(client.get_schema().to_payload())

  elif args.command == "gremlin":
    bindings = None
    if args.bindings:
      try:
        bindings = json.loads(args.bindings)
      except json.JSONDecodeError as e:
        logger.error(f"Invalid bindings JSON: {e}")
        return 1
      if not isinstance(bindings, dict):
        logger.error("Bindings must be a JSON object")
        return 1
    _print_json(client.execute_gremlin(args.query, bindings).to_dict())

  elif args.command == "vertex":
    vertex = client.get_vertex(args.id)
    _print_json(vertex.model_dump(by_alias=True) if vertex else None)

  elif args.command == "edge":
    edge = client.get_edge(args.id)
    _print_json(edge.model_dump(by_alias=True) if edge else None)

  elif args.command == "load-graphson":
    loaded = client.load_graphson_from_file(args.file)
    _print_json({"file": args.file, "loaded": loaded})
    return 0 if loaded else 1

  return 0


def main(argv: Optional[List[str]] = None) -> int:
  """Main CLI interface."""
  parser = build_parser()
  args = parser.parse_args(argv)

  if not args.command:
    parser.print_help()
    return 1

  try:
    client = _create_client(args)
  except GraphAPIError as e:
    logger.error(f"Configuration error: {e}")
    return 1

  try:
    return _run_command(client, args)
  except GraphAPIError as e:
    logger.error(f"API error: {e}")
    if e.response_data:
      logger.error(f"Response: {json.dumps(e.response_data, indent=2, default=str)}")
    return 1
  except ValueError as e:
    logger.error(f"Invalid argument: {e}")
    return 1
  finally:
    client.close()


if __name__ == "__main__":
  exit(main())
