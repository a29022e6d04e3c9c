from typing import Any, Dict, List

from pydantic import BaseModel, Field, field_validator


class PanelCfg(BaseModel):
    name: str
    label: str = ""
    keywords: List[str] = []

    @field_validator("keywords")
    @classmethod
    def _no_blank_keywords(cls, v: List[str]):
        # una keyword vacía haría match con cualquier parámetro
        return [k for k in v if k and k.strip()]


class EngineCfg(BaseModel):
    same_tolerance: float = Field(1e-6, gt=0)
    stable_abs_diff: float = Field(0.01, ge=0)
    worsening_pct_threshold: float = Field(10.0, ge=0)


class Settings(BaseModel):
    app: Dict[str, Any] = {}
    paths: Dict[str, str] = {}
    panels: List[PanelCfg] = []
    priority_params: List[str] = []
    engine: EngineCfg = EngineCfg()
