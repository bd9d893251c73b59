import os
from pathlib import Path

BASE_DIR = Path(__file__).resolve().parent
DATA_DIR = Path(os.environ.get("SWITCHBOX_DEVICE_DIR", BASE_DIR / "../data/raw_device")).resolve()

DEVICE_INFO_FILE = "deviceInfo.json"
TILES_FILE = "tiles.json"
WIRES_FILE = "wires.json"
PIPS_FILE = "pips.json"
NODES_FILE = "nodes.json"

DEVICE_INFO_PATH = DATA_DIR / DEVICE_INFO_FILE
TILES_PATH = DATA_DIR / TILES_FILE
WIRES_PATH = DATA_DIR / WIRES_FILE
PIPS_PATH = DATA_DIR / PIPS_FILE
NODES_PATH = DATA_DIR / NODES_FILE
