from rmsettings.main import run

run()
