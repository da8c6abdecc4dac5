from .alignment import (  # noqa
    AlignmentReport,
    ExogMap,
    align_report,
    empty_map,
    fill_column,
    map_from_csv,
    map_to_matrix,
    matrix_to_map,
    resize_map,
    set_cell,
    template_rows,
)

__all__ = [
    "AlignmentReport",
    "ExogMap",
    "align_report",
    "empty_map",
    "fill_column",
    "map_from_csv",
    "map_to_matrix",
    "matrix_to_map",
    "resize_map",
    "set_cell",
    "template_rows",
]
