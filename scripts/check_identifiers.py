"""
Resolve an identifier list against the configured copy-number table and
print what matched and what didn't.

    python scripts/check_identifiers.py genes.txt [--accession]
"""
import sys
from pathlib import Path

from cn_browser.config.loader import load_global_config
from cn_browser.core.loader import load_dataset
from cn_browser.core.resolver import IdentifierResolver, SearchMode
from cn_browser.services.filter_lists import parse_filter_list_data

BASE_DIR = Path(__file__).parent.parent
CONFIG_DIR = BASE_DIR / "config"


def check_identifiers(list_path: Path, mode: SearchMode) -> None:
    cfg = load_global_config(CONFIG_DIR)
    dataset = load_dataset(cfg.data_file)
    resolver = IdentifierResolver(dataset)

    identifiers = parse_filter_list_data(list_path.read_text())
    result = resolver.resolve_many(identifiers, mode)

    print(f"{len(dataset)} proteins · {len(dataset.cell_lines)} cell lines")
    print(f"{len(identifiers)} identifiers -> {len(result.matched)} matched, {len(result.unmatched)} unmatched")
    print("-" * 60)
    for gene in result.matched:
        print(f"{'MATCHED':<10} | {gene}")
    for query in result.unmatched:
        print(f"{'MISSING':<10} | {query}")


if __name__ == "__main__":
    if len(sys.argv) < 2:
        print(__doc__)
        sys.exit(1)
    mode = SearchMode.ACCESSION if "--accession" in sys.argv[2:] else SearchMode.GENE
    check_identifiers(Path(sys.argv[1]), mode)
