import io
from numbers import Real

from PIL import Image, ImageDraw

from .export_strategy import ImageExportStrategy
from ...validation.graph_queries import graph_edges
from ....utils.logger.logger import Logger


class PngExportStrategy(ImageExportStrategy):
    NODE_RADIUS = 25
    GENE_FILL = (220, 38, 38)
    PROTEIN_FILL = (248, 113, 113)
    EDGE_FILL = (239, 68, 68)

    def generate_export(self, state, now=None):
        """Draw the knowledge graph at its layout coordinates."""
        img = self._create_graph_image(state.graph_nodes)
        buffer = io.BytesIO()
        img.save(buffer, format='PNG')
        return [("knowledge_graph.png", buffer.getvalue())]

    def _create_graph_image(self, graph_nodes, padding=50):
        """Draw nodes with usable coordinates and the edges between them."""
        nodes = {
            node["id"]: node for node in (graph_nodes if isinstance(graph_nodes, list) else [])
            if isinstance(node, dict) and isinstance(node.get("x"), Real)
            and isinstance(node.get("y"), Real) and isinstance(node.get("id"), str)
        }
        if not nodes:
            return Image.new("RGB", (100, 100), "black")

        min_x = min(node["x"] for node in nodes.values())
        max_x = max(node["x"] for node in nodes.values())
        min_y = min(node["y"] for node in nodes.values())
        max_y = max(node["y"] for node in nodes.values())

        margin = padding + self.NODE_RADIUS
        width = int(max_x - min_x + 2 * margin)
        height = int(max_y - min_y + 2 * margin)

        img = Image.new("RGB", (width, height), "black")
        draw = ImageDraw.Draw(img)

        def to_pixel(node):
            return int(node["x"] - min_x + margin), int(node["y"] - min_y + margin)

        for source_id, target_id in graph_edges(list(nodes.values())):
            draw.line((*to_pixel(nodes[source_id]), *to_pixel(nodes[target_id])),
                      fill=self.EDGE_FILL, width=2)

        r = self.NODE_RADIUS
        for node in nodes.values():
            x, y = to_pixel(node)
            fill = self.GENE_FILL if node.get("type") == "gene" else self.PROTEIN_FILL
            draw.ellipse([x - r, y - r, x + r, y + r], fill=fill, outline="white", width=2)
            label = str(node.get("name", node["id"]))
            left, top, right, bottom = draw.textbbox((0, 0), label)
            draw.text((x - (right - left) // 2, y - (bottom - top) // 2), label, fill="white")

        Logger.log(f"Knowledge graph image drawn: {width}x{height}, {len(nodes)} nodes")
        return img
