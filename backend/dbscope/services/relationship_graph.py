"""Relationship graph: ER diagram nodes/edges and catalog reference checks.

Nodes are laid out on a fixed grid; edges point from the referenced table to
the table that owns the foreign key column, one edge per foreign key column.
"""

import logging
from collections.abc import Sequence

from dbscope.schemas.schema import (
    DiagramEdge,
    DiagramNode,
    DiagramResponse,
    Position,
    TableSchema,
)

logger = logging.getLogger(__name__)

NODE_SPACING_X = 350
NODE_SPACING_Y = 300
GRID_MARGIN = 50


def _make_node(schema: TableSchema, index: int, columns_per_row: int) -> DiagramNode:
    x = (index % columns_per_row) * NODE_SPACING_X + GRID_MARGIN
    y = (index // columns_per_row) * NODE_SPACING_Y + GRID_MARGIN
    return DiagramNode(id=schema.name, position=Position(x=x, y=y), data=schema)


def layout_nodes(
    schemas: Sequence[TableSchema], columns_per_row: int = 3
) -> list[DiagramNode]:
    if columns_per_row < 1:
        raise ValueError("columns_per_row must be >= 1")
    return [_make_node(schema, i, columns_per_row) for i, schema in enumerate(schemas)]


def foreign_key_edges(schemas: Sequence[TableSchema]) -> list[DiagramEdge]:
    edges: list[DiagramEdge] = []
    for schema in schemas:
        for col in schema.columns:
            if not (col.is_foreign_key and col.references):
                continue
            ref = col.references
            edges.append(
                DiagramEdge(
                    id=f"e-{schema.name}-{col.name}-{ref.table}",
                    source=ref.table,
                    source_column=ref.column,
                    target=schema.name,
                    target_column=col.name,
                )
            )
    return edges


def build_diagram(schemas: Sequence[TableSchema]) -> DiagramResponse:
    return DiagramResponse(nodes=layout_nodes(schemas), edges=foreign_key_edges(schemas))


def validate_references(schemas: Sequence[TableSchema]) -> list[str]:
    """Return one message per foreign key that points outside the catalog.

    References to a column that exists but is not a primary key are allowed;
    they are logged as warnings only.
    """
    by_name = {schema.name: schema for schema in schemas}
    problems: list[str] = []

    for schema in schemas:
        for col in schema.columns:
            if not col.references:
                continue
            ref = col.references
            target_table = by_name.get(ref.table)
            if target_table is None:
                problems.append(
                    f"{schema.name}.{col.name} references missing table {ref.table!r}"
                )
                continue
            target_col = target_table.get_column(ref.column)
            if target_col is None:
                problems.append(
                    f"{schema.name}.{col.name} references missing column "
                    f"{ref.table}.{ref.column}"
                )
            elif not target_col.is_primary_key:
                logger.warning(
                    "%s.%s references non-key column %s.%s",
                    schema.name,
                    col.name,
                    ref.table,
                    ref.column,
                )

    return problems
