import os
import sys

# Permet d'importer "frameledger.*" quand on lance ce script directement
sys.path.append(os.path.dirname(os.path.dirname(__file__)))

from frameledger.cli import app  # noqa: E402


def main():
    # ex: python scripts/import_inventory_from_csv.py catalog.csv --shop-id 1
    app(["import-csv", *sys.argv[1:]])


if __name__ == "__main__":
    main()
