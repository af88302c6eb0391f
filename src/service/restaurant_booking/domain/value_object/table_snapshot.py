import attrs


@attrs.frozen
class TableSnapshot:
    table_id: str
    section_id: str
    restaurant_id: str
    capacity: int
