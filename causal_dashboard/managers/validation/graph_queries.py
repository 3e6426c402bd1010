from typing import List, Optional, Tuple

from ...models.exceptions import NodeNotFoundError
from ...utils.logger.logger import Logger


def _node_records(graph_nodes) -> list:
    if not isinstance(graph_nodes, list):
        return []
    return [node for node in graph_nodes if isinstance(node, dict) and isinstance(node.get("id"), str)]


def graph_edges(graph_nodes) -> List[Tuple[str, str]]:
    """
    (source, target) for each connection whose target is a known node.

    Dangling ids and malformed connection lists are skipped.
    """
    nodes = _node_records(graph_nodes)
    known_ids = {node["id"] for node in nodes}
    edges = []
    for node in nodes:
        connections = node.get("connections")
        if not isinstance(connections, list):
            continue
        for target in connections:
            if isinstance(target, str) and target in known_ids:
                edges.append((node["id"], target))
    return edges


def find_node(graph_nodes, node_id) -> Optional[dict]:
    """First node with `node_id`, or None."""
    for node in _node_records(graph_nodes):
        if node["id"] == node_id:
            return node
    return None


def node_detail(graph_nodes, node_id) -> dict:
    """
    Name, type and connection count of a graph node.

    Raises:
        NodeNotFoundError: If no node has `node_id`.
    """
    node = find_node(graph_nodes, node_id)
    if node is None:
        Logger.log(f"NodeNotFoundError: {node_id}", Logger.LogPriority.ERROR)
        raise NodeNotFoundError(f"Node '{node_id}' not found in knowledge graph.")
    connections = node.get("connections")
    return {
        "id": node["id"],
        "name": node.get("name"),
        "type": node.get("type"),
        "connection_count": len(connections) if isinstance(connections, list) else 0,
    }
