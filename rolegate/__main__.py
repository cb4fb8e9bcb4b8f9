from rolegate.cli import app

app()
