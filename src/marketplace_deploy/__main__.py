from .deploy import run

run()
