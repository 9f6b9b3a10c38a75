from soupdecode.cli import cli

cli()
