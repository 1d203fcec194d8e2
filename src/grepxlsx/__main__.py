from grepxlsx.cli import app

app(prog_name="grep-xlsx")
