# src/gauge_exec/__main__.py

from gauge_exec.cli.main import cli

if __name__ == "__main__":
    cli()
