from code_control.cli import app

app(prog_name="control")
