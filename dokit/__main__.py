"""
CLI entry point, when used as a module: `python -m dokit`.

Useful for debugging in the IDEs (use the start-mode "Module", module "dokit").
"""
from dokit import cli

if __name__ == '__main__':
    cli.main()
