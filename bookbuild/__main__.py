from bookbuild.convert import main_entry

main_entry()
