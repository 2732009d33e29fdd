from src.attendance_tracker.attendance_tracker.main import create_app

app = create_app()

if __name__ == "__main__":
    # The reloader would start a second auto-close scheduler.
    app.run(debug=app.config["DEBUG"], use_reloader=False)
