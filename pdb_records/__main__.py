"""Package entry point for ``python -m pdb_records``.

Delegates to the CLI's main() function.
"""

from pdb_records.cli import main

if __name__ == "__main__":
    main()
