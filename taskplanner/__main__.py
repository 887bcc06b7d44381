from taskplanner.cli import app

app(prog_name="taskplanner")
