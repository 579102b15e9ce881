# Debug routes for checking deployment configuration

import asyncio
import logging

import httpx
from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from google.genai import errors as genai_errors

from ideor import config
from ideor.auth import UserInfo, require_auth
from ideor.deps import get_ideator
from ideor.llm import Ideator
from ideor.prompts.builder import configured_variant

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/debug", tags=["debug"])

POSSIBLE_CAUSES = {
    401: [
        "API Key inválida ou expirada",
        "API Key não tem permissões necessárias",
        "Verifique se GEMINI_API_KEY está correta",
    ],
    403: [
        "API Key bloqueada ou suspensa",
        "Quota de uso excedida",
        "Região geográfica bloqueada",
        "Billing não configurado no Google Cloud",
    ],
    429: [
        "Limite de requisições por minuto excedido",
        "Aguarde alguns segundos e tente novamente",
        "Considere upgrade do plano Gemini API",
    ],
    503: [
        "API do Gemini temporariamente indisponível",
        "Rate limiting ou throttling",
        "Manutenção programada do Google",
        "Problema de rede entre o servidor e o Google Cloud",
    ],
}


def mask_secret(value: str) -> str:
    """Show only the first and last four characters of a secret."""
    if not value:
        return "NOT SET"
    if len(value) <= 8:
        return "*" * len(value)
    return f"{value[:4]}...{value[-4:]}"


def possible_causes(status_code: int) -> list:
    return POSSIBLE_CAUSES.get(status_code, [
        f"Erro HTTP {status_code}",
        "Verifique os logs do servidor para mais detalhes",
        "Teste a chave manualmente: https://aistudio.google.com/apikey",
    ])


@router.get("/config")
async def debug_config(user: UserInfo = Depends(require_auth)):
    return JSONResponse({
        "environment": config.ENVIRONMENT,
        "gemini": {
            "api_key": mask_secret(config.get_gemini_api_key()),
            "model": config.DEFAULT_MODEL,
            "known_models": [m["id"] for m in config.LLM_MODELS],
            "timeout_seconds": config.GEMINI_TIMEOUT_SECONDS,
            "max_retries": config.GEMINI_MAX_RETRIES,
        },
        "prompts": configured_variant().value,
        "limits": {
            "max_input_chars": config.MAX_INPUT_CHARS,
            "max_idea_chars": config.MAX_IDEA_CHARS,
            "min_ideas": config.MIN_IDEAS,
            "max_ideas": config.MAX_IDEAS,
        },
    })


@router.get("/test-gemini")
async def test_gemini(user: UserInfo = Depends(require_auth),
                      ideator: Ideator = Depends(get_ideator)):
    """Look up the configured model without generating content."""
    api_key = config.get_gemini_api_key()
    summary = {
        "api_key_present": bool(api_key),
        "api_key_masked": mask_secret(api_key),
        "model": ideator.model_name,
    }
    if ideator.client is None:
        return JSONResponse({**summary, "success": False, "error": "API Key do Gemini não configurada",
                             "message": "Configure a variável de ambiente GEMINI_API_KEY"})

    try:
        model = await asyncio.wait_for(ideator.client.aio.models.get(model=ideator.model_name),
                                       timeout=ideator.timeout)
    except genai_errors.APIError as e:
        logger.warning(f"Gemini connectivity check failed with {e.code}: {e.message}")
        return JSONResponse({**summary, "success": False, "status_code": e.code,
                             "error": f"Gemini API retornou erro: {e.code}",
                             "response_body": e.message,
                             "possible_causes": possible_causes(e.code)})
    except (asyncio.TimeoutError, httpx.TransportError) as e:
        logger.warning(f"Gemini connectivity check could not reach the API: {e!r}")
        return JSONResponse({**summary, "success": False, "error": "Exceção ao conectar com Gemini API",
                             "exception_type": type(e).__name__})

    return JSONResponse({**summary, "success": True, "status_code": 200,
                         "message": "Conexão com Gemini API bem-sucedida",
                         "display_name": getattr(model, "display_name", None)})
