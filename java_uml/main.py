from fastapi import FastAPI, HTTPException
from pydantic import BaseModel, Field
from typing import Any, Dict

from .cir.graph import CIRGraph
from .config import DEFAULT_BASE_X, DEFAULT_BASE_Y, DEFAULT_SPACING, LOG_LEVEL
from .converter import JavaToUmletConverter
from .errors import EmptyInputError, NoTypesFoundError
from .log import setup_logging
from .uml.plantuml import generate_class_diagram, generate_package_diagram

setup_logging(LOG_LEVEL)

app = FastAPI(title="Java -> UML class model")


class ParseRequest(BaseModel):
    code: str


class UmletRequest(BaseModel):
    code: str
    spacing: int = Field(DEFAULT_SPACING, ge=0)
    base_x: int = DEFAULT_BASE_X
    base_y: int = DEFAULT_BASE_Y


class PlantUMLRequest(BaseModel):
    code: str
    diagram_type: str = "class"  # "class" or "package"


class PlantUMLResponse(BaseModel):
    plantuml: str


def _parse_or_raise(code: str):
    # one converter per request; nothing is shared between calls
    try:
        return JavaToUmletConverter().parse(code)
    except EmptyInputError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except NoTypesFoundError as e:
        raise HTTPException(status_code=422, detail=str(e))


@app.post("/parse")
def parse(req: ParseRequest) -> Dict[str, Any]:
    result = _parse_or_raise(req.code)
    return {
        "language": "java",
        "model": result.to_dict(),
        "cir": CIRGraph.from_parse_result(result).to_debug_json(),
    }


@app.post("/uml/umlet")
def uml_umlet(req: UmletRequest) -> Dict[str, Any]:
    options = {"spacing": req.spacing, "base_x": req.base_x, "base_y": req.base_y}
    return JavaToUmletConverter().convert(req.code, options)


@app.post("/uml/plantuml", response_model=PlantUMLResponse)
def uml_plantuml(req: PlantUMLRequest):
    dt = req.diagram_type.lower().strip()
    if dt not in ("class", "package"):
        raise HTTPException(status_code=400, detail=f"Unsupported diagram_type: {req.diagram_type}")

    result = _parse_or_raise(req.code)
    cir = CIRGraph.from_parse_result(result).to_debug_json()

    if dt == "class":
        plantuml = generate_class_diagram(cir)
    else:
        plantuml = generate_package_diagram(cir)

    return PlantUMLResponse(plantuml=plantuml)


@app.get("/health")
def health():
    return {"ok": True}
