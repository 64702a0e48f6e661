from grafana_tfgen.cli.main import main

main()
