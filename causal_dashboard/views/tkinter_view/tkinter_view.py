import tkinter as tk
from tkinter import filedialog

from ...managers.view.view_strategy import ViewStrategy
from ...managers.scheduler.tkinter_scheduler import TkinterScheduler
from ...managers.validation.graph_queries import graph_edges
from ...models.exceptions import StateTransitionError, NodeNotFoundError
from ...utils.logger.logger import Logger
from .latent_panel import latent_rows, row_layout_key


class TkinterView(ViewStrategy):
    """Single-window Tkinter dashboard driven by store snapshots."""

    # GENERAL STYLE
    FONT_FAMILY = "Consolas"
    HEADING_FONT = (FONT_FAMILY, 20)
    SUBHEADING_FONT = (FONT_FAMILY, 12)
    BODY_FONT = (FONT_FAMILY, 10)
    BG_COLOR = "gray9"
    PANEL_COLOR = "gray15"
    FG_COLOR = "white"
    ACCENT_RGB = (239, 68, 68)
    BG_RGB = (23, 23, 23)
    GENE_COLOR = "#dc2626"
    PROTEIN_COLOR = "#f87171"

    PARTICLE_CANVAS_SIZE = 300
    GRAPH_CANVAS_SIZE = (420, 280)
    CHART_CANVAS_SIZE = (420, 160)
    BAR_WIDTH = 200

    def __init__(self, controller):
        """Initialize window, panels and the Tk-backed scheduler."""
        Logger.log(f"start TkinterView __init__(self, controller)")
        super().__init__(controller)
        self.root = tk.Tk()
        self.root.title("Multi-Scale Causal Inference Dashboard")
        self.root.geometry("1000x760")
        self.root.configure(bg=self.BG_COLOR)
        self.root.minsize(900, 700)
        self.root.protocol("WM_DELETE_WINDOW", self.stop_view)

        self._unsubscribe = None
        self._node_items = {}
        self._latent_rows = []
        self._latent_row_key = None
        self._build_layout()
        Logger.log(f"end TkinterView __init__(self, controller)")

    # LAYOUT
    def _build_layout(self):
        heading = tk.Label(self.root, text="Multi-Scale Causal Inference", font=self.HEADING_FONT,
                           fg=self.FG_COLOR, bg=self.BG_COLOR)
        heading.pack(pady=(10, 5))

        body = tk.Frame(self.root, bg=self.BG_COLOR)
        body.pack(fill=tk.BOTH, expand=True, padx=10)

        left = tk.Frame(body, bg=self.BG_COLOR)
        left.pack(side=tk.LEFT, fill=tk.Y)
        right = tk.Frame(body, bg=self.BG_COLOR)
        right.pack(side=tk.LEFT, fill=tk.BOTH, expand=True, padx=(10, 0))

        self.particle_canvas = tk.Canvas(left, width=self.PARTICLE_CANVAS_SIZE,
                                         height=self.PARTICLE_CANVAS_SIZE,
                                         bg=self.BG_COLOR, highlightthickness=0)
        self.particle_canvas.pack(pady=(0, 10))

        self.time_label = tk.Label(left, font=self.SUBHEADING_FONT, fg=self.FG_COLOR, bg=self.BG_COLOR)
        self.time_label.pack(anchor="w")

        self.latent_frame = tk.Frame(left, bg=self.PANEL_COLOR)
        self.latent_frame.pack(fill=tk.X, pady=5)

        self.parameter_label = tk.Label(left, font=self.BODY_FONT, fg=self.FG_COLOR, bg=self.PANEL_COLOR,
                                        justify=tk.LEFT, anchor="w")
        self.parameter_label.pack(fill=tk.X, pady=5)

        width, height = self.GRAPH_CANVAS_SIZE
        self.graph_canvas = tk.Canvas(right, width=width, height=height, bg=self.PANEL_COLOR,
                                      highlightthickness=0)
        self.graph_canvas.pack(fill=tk.X)
        self.node_label = tk.Label(right, font=self.BODY_FONT, fg=self.FG_COLOR, bg=self.BG_COLOR,
                                   anchor="w", text="Click a node for details")
        self.node_label.pack(fill=tk.X, pady=(2, 8))

        width, height = self.CHART_CANVAS_SIZE
        self.chart_canvas = tk.Canvas(right, width=width, height=height, bg=self.PANEL_COLOR,
                                      highlightthickness=0)
        self.chart_canvas.pack(fill=tk.X)

        self.validation_label = tk.Label(right, font=self.BODY_FONT, fg=self.FG_COLOR, bg=self.BG_COLOR,
                                         justify=tk.LEFT, anchor="w")
        self.validation_label.pack(fill=tk.X, pady=(8, 0))

        toolbar = tk.Frame(self.root, bg=self.BG_COLOR)
        toolbar.pack(fill=tk.X, padx=10, pady=10)
        self.run_button = self._button(toolbar, "Start", self.on_toggle)
        self._button(toolbar, "Reset", self.on_reset)
        self._button(toolbar, "Upload Data", self.on_import)
        self._button(toolbar, "Export Results", self.on_export)
        self._button(toolbar, "Refresh Validation", self.render_validation)
        self.status_label = tk.Label(toolbar, font=self.SUBHEADING_FONT, fg=self.FG_COLOR, bg=self.BG_COLOR)
        self.status_label.pack(side=tk.LEFT, padx=10)

    def _button(self, parent, text, command):
        button = tk.Button(parent, text=text, command=command, font=self.BODY_FONT,
                           bg=self.PANEL_COLOR, fg=self.FG_COLOR, activebackground=self.BG_COLOR,
                           activeforeground=self.FG_COLOR, relief=tk.FLAT, padx=10)
        button.pack(side=tk.LEFT, padx=(0, 5))
        return button

    # ACTIONS
    def on_toggle(self):
        try:
            self.controller.toggle_simulation()
        except StateTransitionError as ex:
            Logger.log(f"toggle refused: {ex}", Logger.LogPriority.WARNING)
            self.status_label.config(text="Simulation complete; press Reset")

    def on_reset(self):
        self.controller.reset_simulation()

    def on_import(self):
        file_path = filedialog.askopenfilename(filetypes=[("JSON snapshot", "*.json")])
        if file_path:
            self.controller.import_snapshot_file(file_path)

    def on_export(self):
        file_path = filedialog.asksaveasfilename(defaultextension=".json",
                                                 filetypes=[("JSON snapshot", "*.json")])
        if not file_path:
            return
        try:
            with open(file_path, "wb") as f:
                f.write(self.controller.export_snapshot())
            Logger.log(f"snapshot exported to {file_path}", Logger.LogPriority.INFO)
        except OSError as ex:
            Logger.log(f"export to {file_path} failed: {ex}", Logger.LogPriority.ERROR)
            self.status_label.config(text="✗ Error writing file")

    def on_node_click(self, node_id):
        try:
            self.controller.select_node(node_id)
        except NodeNotFoundError as ex:
            Logger.log(f"selection refused: {ex}", Logger.LogPriority.WARNING)

    # RENDERING
    def render(self, snapshot):
        """Redraw every panel from `snapshot`."""
        self.render_particles(snapshot)
        self.time_label.config(text=f"Time step: {snapshot.time_step}")
        self.run_button.config(text="Pause" if snapshot.running else "Start")
        self.status_label.config(text=snapshot.status_message)
        self.render_latents(snapshot)
        self.render_parameters(snapshot)
        self.render_graph(snapshot)
        self.render_chart()

    def render_particles(self, snapshot):
        canvas = self.particle_canvas
        canvas.delete("all")
        scale = self.PARTICLE_CANVAS_SIZE / self.controller.config.particles.field_size
        by_id = {p.id: p for p in snapshot.particles}
        for link in self.controller.particle_field.links(snapshot.particles):
            a, b = by_id[link.source], by_id[link.target]
            canvas.create_line(a.x * scale, a.y * scale, b.x * scale, b.y * scale,
                               fill=self._blend(link.opacity))
        for p in snapshot.particles:
            x, y, r = p.x * scale, p.y * scale, p.size
            canvas.create_oval(x - r, y - r, x + r, y + r, fill=self._blend(p.opacity), outline="")

    def render_latents(self, snapshot):
        rows = latent_rows(snapshot.latent_variables)
        key = row_layout_key(rows)
        if key != self._latent_row_key:
            for widget in self.latent_frame.winfo_children():
                widget.destroy()
            self._latent_rows = []
            for _ in rows:
                row = tk.Frame(self.latent_frame, bg=self.PANEL_COLOR)
                row.pack(fill=tk.X, padx=5, pady=2)
                label = tk.Label(row, font=self.BODY_FONT, fg=self.FG_COLOR, bg=self.PANEL_COLOR, anchor="w")
                label.pack(fill=tk.X)
                bar = tk.Canvas(row, width=self.BAR_WIDTH, height=6, bg=self.BG_COLOR, highlightthickness=0)
                bar.pack(anchor="w")
                rect = bar.create_rectangle(0, 0, 0, 6, fill=self.GENE_COLOR, outline="")
                self._latent_rows.append((label, bar, rect))
            self._latent_row_key = key

        for (label, bar, rect), (_, text, fraction) in zip(self._latent_rows, rows):
            label.config(text=text)
            bar.coords(rect, 0, 0, self.BAR_WIDTH * fraction, 6)

    def render_parameters(self, snapshot):
        lines = ["ODE parameters"]
        for parameter in snapshot.ode_parameters:
            if isinstance(parameter, dict):
                lines.append(f"  {parameter.get('param')}  {parameter.get('value')}  ({parameter.get('strength')})")
        self.parameter_label.config(text="\n".join(lines))

    def render_graph(self, snapshot):
        canvas = self.graph_canvas
        canvas.delete("all")
        self._node_items = {}
        nodes = {
            node["id"]: node for node in snapshot.graph_nodes
            if isinstance(node, dict) and isinstance(node.get("id"), str)
            and isinstance(node.get("x"), (int, float)) and isinstance(node.get("y"), (int, float))
        } if isinstance(snapshot.graph_nodes, list) else {}

        for source, target in graph_edges(list(nodes.values())):
            a, b = nodes[source], nodes[target]
            canvas.create_line(a["x"], a["y"], b["x"], b["y"], fill=self.GENE_COLOR, width=2,
                               arrow=tk.LAST)
        r = 22
        for node_id, node in nodes.items():
            fill = self.GENE_COLOR if node.get("type") == "gene" else self.PROTEIN_COLOR
            outline = "yellow" if node_id == snapshot.selected_node_id else self.FG_COLOR
            item = canvas.create_oval(node["x"] - r, node["y"] - r, node["x"] + r, node["y"] + r,
                                      fill=fill, outline=outline, width=2)
            canvas.create_text(node["x"], node["y"], text=str(node.get("name", node_id)),
                               fill=self.FG_COLOR, font=self.BODY_FONT)
            canvas.tag_bind(item, "<Button-1>", lambda _e, nid=node_id: self.on_node_click(nid))
            self._node_items[node_id] = item

        detail = self.controller.get_selected_node()
        if detail is None:
            self.node_label.config(text="Click a node for details")
        else:
            self.node_label.config(text=f"{detail['name']} ({detail['type']}), "
                                        f"{detail['connection_count']} connection(s)")

    def render_chart(self):
        canvas = self.chart_canvas
        canvas.delete("all")
        points = [p for p in self.controller.get_visible_phenotype_window() if isinstance(p, dict)]
        if len(points) < 2:
            return
        width, height = self.CHART_CANVAS_SIZE
        max_time = max(len(self.controller.get_snapshot().phenotype_series) - 1, 1)
        series_colors = {"migration": self.GENE_COLOR, "differentiation": "#60a5fa", "predicted": "gray60"}
        for key, color in series_colors.items():
            coords = []
            for point in points:
                value = point.get(key)
                if isinstance(value, (int, float)) and isinstance(point.get("time"), (int, float)):
                    coords.extend((10 + point["time"] / max_time * (width - 20),
                                   height - 10 - max(0.0, min(1.5, value)) / 1.5 * (height - 20)))
            if len(coords) >= 4:
                canvas.create_line(*coords, fill=color, width=2, dash=(4, 2) if key == "predicted" else None)

    def render_validation(self):
        summary = self.controller.get_validation_summary()
        lines = ["Validation (placeholder values)"]
        for result in summary.mendelian_randomization:
            lines.append(f"  {result.name} → Phenotype  p = {result.p_value:.2e}  {result.verdict}")
        for knockout in summary.knockouts:
            lines.append(f"  {knockout.name} knockout: {knockout.predicted_effect:.2f} reduction in migration")
        metrics = summary.model_metrics
        lines.append(f"  R² {metrics['r2Score']}  MSE {metrics['mse']}  "
                     f"Sparsity {metrics['sparsity']:.0%}  MI {metrics['mutualInformation']}")
        self.validation_label.config(text="\n".join(lines))

    def _blend(self, opacity):
        """Tk has no alpha; mix the accent colour into the background instead."""
        rgb = [int(bg + (fg - bg) * opacity) for fg, bg in zip(self.ACCENT_RGB, self.BG_RGB)]
        return "#%02x%02x%02x" % tuple(rgb)

    # START VIEW
    def start_view(self):
        """Hook the controller to the Tk loop, draw once, and enter the main loop."""
        Logger.log("start start_view(self)")
        self.controller.attach_scheduler(TkinterScheduler(self.root))
        self._unsubscribe = self.controller.subscribe(self.render)
        self.render(self.controller.get_snapshot())
        self.render_validation()
        self.root.mainloop()
        Logger.log(f"end start_view(self)")

    # STOP VIEW
    def stop_view(self):
        Logger.log("start stop_view(self)")
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None
        self.controller.shutdown()
        self.root.quit()
        Logger.log(f"end stop_view(self)")
