# hotboot/__main__.py
from hotboot.main import main

main()
