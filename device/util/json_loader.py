#Load json files

from pathlib import Path
from device.util.validators import DeviceInfo , ListTiles , ListWires , ListPIPs , ListNodes

class JsonLoader:
    """
    Load Json Files
    """
    @staticmethod
    def _read(path:str | Path) -> str:
        with open(path, encoding="utf-8") as f:
            return f.read()

    @staticmethod
    def load_device_info(path:str | Path) -> DeviceInfo:
        """
        Load Device Info
        """
        return DeviceInfo.model_validate_json(JsonLoader._read(path))

    @staticmethod
    def load_tiles(path:str | Path) -> ListTiles:
        """
        Load Tiles
        """
        return ListTiles.model_validate_json(JsonLoader._read(path))

    @staticmethod
    def load_wires(path:str | Path) -> ListWires:
        """
        Load Wires
        """
        return ListWires.model_validate_json(JsonLoader._read(path))

    @staticmethod
    def load_pips(path:str | Path) -> ListPIPs:
        """
        Load PIPs
        """
        return ListPIPs.model_validate_json(JsonLoader._read(path))

    @staticmethod
    def load_nodes(path:str | Path) -> ListNodes:
        """
        Load Nodes
        """
        return ListNodes.model_validate_json(JsonLoader._read(path))
