from recordkeep.cli.app import app

app(prog_name="recordkeep")
