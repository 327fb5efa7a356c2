from repo_readiness.cli import app

app()
