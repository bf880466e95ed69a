from weather_archive.web import main

main()
