import importlib
import logging
from types import ModuleType
from typing import Dict, List, Optional, Tuple

import pandas as pd

from ..errors import MissingDependencyError, UnknownTableError

logger = logging.getLogger(__name__)

# Lahman table name -> loader functions in `pybaseball.lahman`, first match wins.
# Older pybaseball releases expose `teams`, newer ones split it into `teams_core`.
LAHMAN_TABLES: Dict[str, Tuple[str, ...]] = {
    "AllstarFull": ("all_star_full",),
    "Appearances": ("appearances",),
    "AwardsManagers": ("awards_managers",),
    "AwardsPlayers": ("awards_players",),
    "AwardsShareManagers": ("awards_share_managers",),
    "AwardsSharePlayers": ("awards_share_players",),
    "Batting": ("batting",),
    "BattingPost": ("batting_post",),
    "CollegePlaying": ("college_playing",),
    "Fielding": ("fielding",),
    "FieldingOF": ("fielding_of",),
    "FieldingOFsplit": ("fielding_of_split",),
    "FieldingPost": ("fielding_post",),
    "HallOfFame": ("hall_of_fame",),
    "HomeGames": ("home_games",),
    "Managers": ("managers",),
    "ManagersHalf": ("managers_half",),
    "Parks": ("parks",),
    "People": ("people", "master"),
    "Pitching": ("pitching",),
    "PitchingPost": ("pitching_post",),
    "Salaries": ("salaries",),
    "Schools": ("schools",),
    "SeriesPost": ("series_post",),
    "Teams": ("teams_core", "teams"),
    "TeamsFranchises": ("teams_franchises",),
    "TeamsHalf": ("teams_half",),
}


class PybaseballSource:
    """Lahman tables as provided by the `pybaseball.lahman` module.

    pybaseball downloads the Lahman CSV release on first use and caches it
    locally, so the first `load` may take a while.
    """

    module_name = "pybaseball.lahman"

    def __init__(self, registry: Optional[Dict[str, Tuple[str, ...]]] = None) -> None:
        self.registry = dict(registry or LAHMAN_TABLES)
        self._mod: Optional[ModuleType] = None

    def _module(self) -> ModuleType:
        if self._mod is None:
            try:
                self._mod = importlib.import_module(self.module_name)
            except ImportError as e:
                raise MissingDependencyError("pybaseball", extra="pybaseball") from e
        return self._mod

    def tables(self) -> List[str]:
        return list(self.registry)

    def load(self, name: str) -> pd.DataFrame:
        if name not in self.registry:
            raise UnknownTableError(name, "pybaseball")
        mod = self._module()
        for fn_name in self.registry[name]:
            fn = getattr(mod, fn_name, None)
            if callable(fn):
                logger.debug("Loading %s via pybaseball.lahman.%s", name, fn_name)
                return fn()
        raise UnknownTableError(name, "pybaseball")
