from samwise.cli.main import cli

cli()
