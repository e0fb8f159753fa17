from __future__ import annotations
from dataclasses import dataclass, field, asdict
from typing import List, Dict, Any


@dataclass
class ViewState:
    """
    Represents the current user selection for a plot view.

    Fields:

    - view_id: registry id of the view being rendered
    - cell_lines: cell lines ticked by the user, in selection order
    - genes: primary gene symbols selected/highlighted by the user
    """

    view_id: str

    cell_lines: List[str] = field(default_factory=list)
    genes: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> ViewState:
        return cls(
            view_id=data.get("view_id"),
            cell_lines=list(data.get("cell_lines") or []),
            genes=list(data.get("genes") or []),
        )

    def with_genes(self, genes: List[str]) -> ViewState:
        """Copy with new genes appended, skipping ones already selected."""
        merged = list(self.genes)
        for gene in genes:
            if gene not in merged:
                merged.append(gene)
        return ViewState(view_id=self.view_id, cell_lines=list(self.cell_lines), genes=merged)
