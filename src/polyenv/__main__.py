from polyenv.cli.app import app

app()
