from .graph_queries import graph_edges, find_node, node_detail
from .validation_summary import (
    ValidationSummary,
    MendelianRandomizationResult,
    KnockoutSuggestion,
    build_validation_summary,
)
