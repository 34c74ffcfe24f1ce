from itemlist.main import run

run()
