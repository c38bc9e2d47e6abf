#run: flask --app budgetsim.wsgi run --port 5000 --debug

from budgetsim.app import create_app

app = create_app()

if __name__ == "__main__":
    app.run(port=5000, debug=True)
