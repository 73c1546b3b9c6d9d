# DEPENDENCIES
import asyncio
from typing import Any
from typing import Dict
from typing import Optional

from utils.logger import log_info
from config.model_config import ModelConfig
from model_manager.llm_manager import LLMManager
from model_manager.errors import classify_error
from model_manager.llm_manager import LLMProvider


class ExternalReasoner:
    """
    The "ask the external model" capability: one prompt kind + payload in, raw answer text out

    Calls are blocking provider requests, so they run in a worker thread; failures are raised
    as classified errors for the RequestScheduler to retry or surface
    """
    def __init__(self, llm_manager: Optional[LLMManager] = None, provider: Optional[LLMProvider] = None):
        """
        Initialize the reasoner

        Arguments:
        ----------
            llm_manager { LLMManager }  : Provider gateway (created from settings when None)

            provider    { LLMProvider } : Provider override
        """
        self.llm_manager = llm_manager or LLMManager()
        self.provider    = provider or self.llm_manager.default_provider

        log_info("ExternalReasoner initialized",
                 provider  = self.provider.value,
                 available = [p.value for p in self.llm_manager.get_available_providers()],
                )


    async def reason(self, prompt_kind: str, payload: Dict[str, Any]) -> str:
        """
        Run one external reasoning call

        Arguments:
        ----------
            prompt_kind { str }  : ModelConfig prompt kind

            payload     { dict } : Template fields for the prompt

        Returns:
        --------
                { str }          : Raw model answer (may or may not contain JSON)

        Raises:
        -------
            QuotaExceeded, TransientFailure, OtherFailure
        """
        prompt     = ModelConfig.render_prompt(prompt_kind, payload)
        generation = ModelConfig.get_generation_config(prompt_kind)

        response   = await asyncio.to_thread(self.llm_manager.complete,
                                             prompt        = prompt,
                                             provider      = self.provider,
                                             system_prompt = ModelConfig.SYSTEM_PROMPT,
                                             **generation,
                                            )

        if not response.success:
            raise classify_error(response.error_message, status_code = response.status_code)

        return response.text
