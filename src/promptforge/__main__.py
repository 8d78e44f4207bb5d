from promptforge.cli.main import cli

cli()
