from __future__ import annotations

import logging
from pathlib import Path
from xml.sax.saxutils import escape, quoteattr

import networkx as nx

from .graph import Graph
from .wire_models import GraphValue

logger = logging.getLogger(__name__)

MARGIN = {"top": 10, "right": 30, "bottom": 30, "left": 40}
RADIUS_SCALE = 40.0


def render_json(graph: Graph) -> str:
    return GraphValue.from_domain(graph).model_dump_json(indent=2, by_alias=True)


def layout_positions(graph: Graph, width: float, height: float, seed: int = 42) -> dict[str, tuple[float, float]]:
    """Force-directed positions in pixel space, centered in the drawing area."""
    g = nx.DiGraph()
    g.add_nodes_from(node.identity for node in graph.nodes)
    g.add_edges_from(edge.key for edge in graph.edges if edge.source in g and edge.target in g)
    if g.number_of_nodes() == 0:
        return {}

    raw = nx.spring_layout(g, seed=seed, center=(0.0, 0.0), scale=1.0)
    half_w = width / 2.0
    half_h = height / 2.0
    return {
        node_id: (half_w + float(x) * half_w * 0.8, half_h + float(y) * half_h * 0.8)
        for node_id, (x, y) in raw.items()
    }


def render_svg(graph: Graph, width: int = 400, height: int = 400, seed: int = 42) -> str:
    """Avatar-per-node SVG; node size scales with rank, arrows follow edges."""
    inner_w = width - MARGIN["left"] - MARGIN["right"]
    inner_h = height - MARGIN["top"] - MARGIN["bottom"]
    positions = layout_positions(graph, inner_w, inner_h, seed=seed)
    by_id = {node.identity: node for node in graph.nodes}

    lines = [
        f'<svg xmlns="http://www.w3.org/2000/svg" xmlns:xlink="http://www.w3.org/1999/xlink" '
        f'width="{width}" height="{height}">',
        f'<g transform="translate({MARGIN["left"]}, {MARGIN["top"]})">',
        "<defs>",
    ]

    clip_ids = {node.identity: f"circle-{index}" for index, node in enumerate(graph.nodes)}

    for index, edge in enumerate(graph.edges):
        target = by_id.get(edge.target)
        ref_x = (target.rank if target else 0.0) * RADIUS_SCALE + 10
        lines.append(
            f'<marker id="arrow-{index}" markerWidth="10" '
            f'markerHeight="7" refX="{ref_x:.3f}" refY="3.5" orient="auto">'
            '<polygon points="0 0, 10 3.5, 0 7"/></marker>'
        )
    for node in graph.nodes:
        x, y = positions[node.identity]
        lines.append(
            f'<clipPath id="{clip_ids[node.identity]}">'
            f'<circle cx="{x:.3f}" cy="{y:.3f}" r="{node.rank * RADIUS_SCALE:.3f}"/></clipPath>'
        )
    lines.append("</defs>")

    for index, edge in enumerate(graph.edges):
        if edge.source not in positions or edge.target not in positions:
            # hand-built graphs may reference identities without a node record
            continue
        x1, y1 = positions[edge.source]
        x2, y2 = positions[edge.target]
        lines.append(
            f'<line x1="{x1:.3f}" y1="{y1:.3f}" x2="{x2:.3f}" y2="{y2:.3f}" style="stroke: #aaa;" '
            f'marker-end="url(#arrow-{index})"/>'
        )

    for node in graph.nodes:
        x, y = positions[node.identity]
        size = node.rank * RADIUS_SCALE * 2
        lines.append(
            f'<image x="{x - size / 2:.3f}" y="{y - size / 2:.3f}" width="{size:.3f}" height="{size:.3f}" '
            f'clip-path="url(#{clip_ids[node.identity]})" xlink:href={quoteattr(node.avatar_url)}/>'
        )
        lines.append(
            f'<text x="{x:.3f}" y="{y:.3f}" style="text-anchor: middle; fill: #555; '
            f'font-family: Arial; font-size: 12px;">{escape(node.identity)}</text>'
        )

    lines.append("</g>")
    lines.append("</svg>")
    return "\n".join(lines)


def write_artifact(content: str, path: str | Path) -> Path:
    out = Path(path)
    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_text(content, encoding="utf-8")
    logger.info("artifact written to %s (%d bytes)", out.resolve(), len(content.encode("utf-8")))
    return out
