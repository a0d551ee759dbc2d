"""Formatting API endpoints"""

from __future__ import annotations

from fastapi import APIRouter, HTTPException

from models.format import FormatRequest, FormatResult, SyntaxInfo, SyntaxKind
from services.config_manager import ConfigManager
from services.formatter import CodeFormatter, FormatError, ParseError, strategy_for

router = APIRouter()
formatter = CodeFormatter()


@router.post("", response_model=FormatResult)
async def format_text(request: FormatRequest) -> FormatResult:
    """Reformat text, filling missing options from configuration.

    An explicit `"keyword_case": null` keeps SQL keywords as written even
    when the configured default is upper or lower; omitting the field uses
    the configured default.
    """
    defaults = ConfigManager.get_instance().get_formatter_defaults()

    indent_width = request.indent_width or defaults["indentWidth"]
    if "keyword_case" in request.model_fields_set:
        keyword_case = request.keyword_case
    else:
        keyword_case = defaults["keywordCase"]
    blank_lines = request.blank_lines if request.blank_lines is not None else defaults["blankLines"]

    try:
        return formatter.reformat(
            request.raw_text,
            request.syntax,
            indent_width,
            keyword_case=keyword_case,
            blank_lines=blank_lines,
        )
    except ParseError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except FormatError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.get("/syntaxes", response_model=list[SyntaxInfo])
async def list_syntaxes() -> list[SyntaxInfo]:
    """List supported syntaxes and the strategy used for each"""
    return [
        SyntaxInfo(
            syntax=syntax,
            strategy=strategy_for(syntax),
            family="sql" if syntax.is_sql else syntax.value,
        )
        for syntax in SyntaxKind
    ]
