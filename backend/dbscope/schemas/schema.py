"""Pydantic schemas for the table catalog and the relationship diagram."""

from pydantic import BaseModel, ConfigDict, Field, model_validator


class ColumnReference(BaseModel):
    model_config = ConfigDict(frozen=True)

    table: str
    column: str


class Column(BaseModel):
    """One column of a catalog table.

    ``references`` is set exactly when ``is_foreign_key`` is true.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    type: str  # uuid | boolean | integer | serial | decimal(p,s) | timestamp | varchar(n) | text
    is_primary_key: bool = False
    is_foreign_key: bool = False
    references: ColumnReference | None = None

    @model_validator(mode="after")
    def _references_match_flag(self) -> "Column":
        if self.is_foreign_key and self.references is None:
            raise ValueError(f"Foreign key column {self.name!r} needs a reference")
        if self.references is not None and not self.is_foreign_key:
            raise ValueError(
                f"Column {self.name!r} has a reference but is not a foreign key"
            )
        return self


class TableSchema(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    columns: tuple[Column, ...]
    row_count: int = Field(ge=0)  # declared cardinality, display only

    def column_names(self) -> list[str]:
        return [col.name for col in self.columns]

    def get_column(self, name: str) -> Column | None:
        return next((col for col in self.columns if col.name == name), None)


class Position(BaseModel):
    x: float
    y: float


class DiagramNode(BaseModel):
    """One table box in the ER diagram."""

    id: str
    type: str = "table"
    position: Position
    data: TableSchema


class DiagramEdge(BaseModel):
    """Arrow from a referenced table to the table holding the foreign key."""

    id: str
    source: str
    source_column: str
    target: str
    target_column: str


class DiagramResponse(BaseModel):
    nodes: list[DiagramNode]
    edges: list[DiagramEdge]
