# app.py
#
# Browser client for the task service.
#
# Run with the following command:
# TASKBOARD_API_URL=http://localhost:8000 panel serve taskboard_dashboard/app.py --show --port 5006
#
import panel as pn

from taskboard_dashboard.board import TaskBoard
from taskboard_dashboard.client import TaskServiceClient
from taskboard_dashboard.config import load_config
from taskboard_dashboard.layout import build_dashboard
from taskboard_dashboard.logger import setup_logger

pn.extension(raw_css=[':root { --design-primary-color: #307096; }'])

config = load_config()
logger = setup_logger(config.log_dir)

# panel serve executes this script once per session, so every browser
# session gets its own board.
board = TaskBoard(client=TaskServiceClient(config.api_url, timeout=config.request_timeout))
board.load()

build_dashboard(board).servable()
