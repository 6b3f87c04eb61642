from no_manual_memo.main import app

app(prog_name="no-manual-memo")
