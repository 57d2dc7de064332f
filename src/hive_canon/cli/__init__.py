"""hive-canon command line interface (typer + rich)."""
