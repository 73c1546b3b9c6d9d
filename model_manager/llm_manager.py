# DEPENDENCIES
import time
import requests
from enum import Enum
from typing import Any
from typing import Dict
from typing import List
from typing import Optional
from dataclasses import dataclass

from utils.logger import log_info
from utils.logger import log_error
from config.settings import settings
from utils.logger import ContractEngineLogger


# Optional imports for API providers
try:
    import openai
    OPENAI_AVAILABLE = True

except ImportError:
    OPENAI_AVAILABLE = False

try:
    import anthropic
    ANTHROPIC_AVAILABLE = True

except ImportError:
    ANTHROPIC_AVAILABLE = False


class LLMProvider(Enum):
    """
    Supported LLM providers
    """
    OLLAMA    = "ollama"
    OPENAI    = "openai"
    ANTHROPIC = "anthropic"


@dataclass
class LLMResponse:
    """
    Standardized LLM response
    """
    text            : str
    provider        : str
    model           : str
    tokens_used     : int
    latency_seconds : float
    success         : bool
    error_message   : Optional[str]            = None
    status_code     : Optional[int]            = None
    raw_response    : Optional[Dict[str, Any]] = None


    def to_dict(self) -> Dict[str, Any]:
        """
        Convert to dictionary
        """
        return {"text"            : self.text,
                "provider"        : self.provider,
                "model"           : self.model,
                "tokens_used"     : self.tokens_used,
                "latency_seconds" : round(self.latency_seconds, 3),
                "success"         : self.success,
                "error_message"   : self.error_message,
                "status_code"     : self.status_code,
               }


class LLMManager:
    """
    Unified LLM manager for multiple providers : handles Ollama (local), OpenAI API, and Anthropic API

    Pacing and retries are owned by the RequestScheduler; this class performs exactly one call per complete()
    """
    def __init__(self, default_provider: Optional[LLMProvider] = None, ollama_base_url: Optional[str] = None,
                 openai_api_key: Optional[str] = None, anthropic_api_key: Optional[str] = None):
        """
        Initialize LLM Manager

        Arguments:
        ----------
            default_provider  : Default LLM provider to use (default: settings.LLM_PROVIDER)

            ollama_base_url   : Ollama server URL (default: settings.OLLAMA_BASE_URL)

            openai_api_key    : OpenAI API key (default: settings.OPENAI_API_KEY)

            anthropic_api_key : Anthropic API key (default: settings.ANTHROPIC_API_KEY)
        """
        self.default_provider  = default_provider or LLMProvider(settings.LLM_PROVIDER)

        # Ollama configuration
        self.ollama_base_url   = ollama_base_url or settings.OLLAMA_BASE_URL
        self.ollama_model      = settings.OLLAMA_MODEL
        self.ollama_timeout    = settings.OLLAMA_TIMEOUT

        # OpenAI configuration
        self.openai_api_key    = openai_api_key or settings.OPENAI_API_KEY
        self.openai_client     = None

        if (OPENAI_AVAILABLE and self.openai_api_key):
            self.openai_client = openai.OpenAI(api_key = self.openai_api_key)

        # Anthropic configuration
        self.anthropic_api_key = anthropic_api_key or settings.ANTHROPIC_API_KEY
        self.anthropic_client  = None

        if (ANTHROPIC_AVAILABLE and self.anthropic_api_key):
            self.anthropic_client = anthropic.Anthropic(api_key = self.anthropic_api_key)

        log_info("LLMManager initialized",
                 default_provider    = self.default_provider.value,
                 openai_available    = self.openai_client is not None,
                 anthropic_available = self.anthropic_client is not None,
                )


    def get_available_providers(self) -> List[LLMProvider]:
        """
        Providers with a configured client (Ollama is assumed reachable)
        """
        available = [LLMProvider.OLLAMA]

        if self.openai_client is not None:
            available.append(LLMProvider.OPENAI)

        if self.anthropic_client is not None:
            available.append(LLMProvider.ANTHROPIC)

        return available


    # UNIFIED COMPLETION METHOD
    @ContractEngineLogger.log_execution_time("llm_complete")
    def complete(self, prompt: str, provider: Optional[LLMProvider] = None, model: Optional[str] = None, temperature: float = 0.1,
                 max_tokens: int = 1000, system_prompt: Optional[str] = None, json_mode: bool = False) -> LLMResponse:
        """
        Unified completion method for all providers

        Arguments:
        ----------
            prompt             : User prompt

            provider           : LLM provider (default: self.default_provider)

            model              : Model name (provider-specific)

            temperature        : Sampling temperature (0.0-1.0)

            max_tokens         : Maximum tokens to generate

            system_prompt      : System prompt (if supported)

            json_mode          : Force JSON output (if supported)

        Returns:
        --------
            { LLMResponse }    : Successful response, or success = False with error_message and status_code
        """
        provider = provider or self.default_provider

        log_info("LLM completion request",
                 provider      = provider.value,
                 prompt_length = len(prompt),
                 temperature   = temperature,
                 max_tokens    = max_tokens,
                )

        try:
            if (provider == LLMProvider.OLLAMA):
                return self._complete_ollama(prompt        = prompt,
                                             model         = model,
                                             temperature   = temperature,
                                             max_tokens    = max_tokens,
                                             system_prompt = system_prompt,
                                             json_mode     = json_mode,
                                            )

            elif (provider == LLMProvider.OPENAI):
                return self._complete_openai(prompt        = prompt,
                                             model         = model,
                                             temperature   = temperature,
                                             max_tokens    = max_tokens,
                                             system_prompt = system_prompt,
                                             json_mode     = json_mode,
                                            )

            elif (provider == LLMProvider.ANTHROPIC):
                return self._complete_anthropic(prompt        = prompt,
                                                model         = model,
                                                temperature   = temperature,
                                                max_tokens    = max_tokens,
                                                system_prompt = system_prompt,
                                               )

            else:
                raise ValueError(f"Unsupported provider: {provider}")

        except Exception as e:
            log_error(e, context = {"component" : "LLMManager", "operation" : "complete", "provider" : provider.value})

            return LLMResponse(text            = "",
                               provider        = provider.value,
                               model           = model or "unknown",
                               tokens_used     = 0,
                               latency_seconds = 0.0,
                               success         = False,
                               error_message   = str(e),
                               status_code     = self._extract_status_code(e),
                              )


    @staticmethod
    def _extract_status_code(error: Exception) -> Optional[int]:
        """
        HTTP status of a failed provider call, when the exception carries one
        """
        status_code = getattr(error, "status_code", None)

        if isinstance(status_code, int):
            return status_code

        response    = getattr(error, "response", None)
        status_code = getattr(response, "status_code", None)

        return status_code if isinstance(status_code, int) else None


    # OLLAMA PROVIDER
    def _complete_ollama(self, prompt: str, model: Optional[str], temperature: float, max_tokens: int, system_prompt: Optional[str], json_mode: bool) -> LLMResponse:
        """
        Complete using local Ollama
        """
        start_time = time.time()
        model      = model or self.ollama_model

        payload    = {"model"   : model,
                      "prompt"  : prompt,
                      "stream"  : False,
                      "options" : {"temperature": temperature, "num_predict": max_tokens},
                     }

        if system_prompt:
            payload["system"] = system_prompt

        if json_mode:
            payload["format"] = "json"

        log_info("Calling Ollama API",
                 model     = model,
                 base_url  = self.ollama_base_url,
                 json_mode = json_mode,
                )

        response       = requests.post(f"{self.ollama_base_url}/api/generate", json = payload, timeout = self.ollama_timeout)
        response.raise_for_status()

        result         = response.json()
        generated_text = result.get('response', '')

        latency        = time.time() - start_time

        # Estimate tokens (rough approximation)
        tokens_used    = len(prompt.split()) + len(generated_text.split())

        log_info("Ollama completion successful",
                 model           = model,
                 tokens_used     = tokens_used,
                 latency_seconds = round(latency, 3),
                )

        return LLMResponse(text            = generated_text,
                           provider        = "ollama",
                           model           = model,
                           tokens_used     = tokens_used,
                           latency_seconds = latency,
                           success         = True,
                           raw_response    = result,
                          )


    # OPENAI PROVIDER
    def _complete_openai(self, prompt: str, model: Optional[str], temperature: float, max_tokens: int, system_prompt: Optional[str], json_mode: bool) -> LLMResponse:
        """
        Complete using OpenAI API
        """
        if self.openai_client is None:
            raise ValueError("OpenAI not available. Install with: pip install openai")

        start_time = time.time()
        model      = model or settings.OPENAI_MODEL

        messages   = list()

        if system_prompt:
            messages.append({"role"    : "system",
                             "content" : system_prompt,
                            })

        messages.append({"role"    : "user",
                         "content" : prompt,
                        })

        log_info("Calling OpenAI API", model = model, json_mode = json_mode)

        api_params = {"model"       : model,
                      "messages"    : messages,
                      "temperature" : temperature,
                      "max_tokens"  : max_tokens,
                     }

        if json_mode:
            api_params["response_format"] = {"type": "json_object"}

        response       = self.openai_client.chat.completions.create(**api_params)
        generated_text = response.choices[0].message.content or ""
        tokens_used    = response.usage.total_tokens if response.usage else 0
        latency        = time.time() - start_time

        log_info("OpenAI completion successful", model = model, tokens_used = tokens_used, latency_seconds = round(latency, 3))

        return LLMResponse(text            = generated_text,
                           provider        = "openai",
                           model           = model,
                           tokens_used     = tokens_used,
                           latency_seconds = latency,
                           success         = True,
                           raw_response    = response.model_dump(),
                          )


    # ANTHROPIC PROVIDER
    def _complete_anthropic(self, prompt: str, model: Optional[str], temperature: float, max_tokens: int, system_prompt: Optional[str]) -> LLMResponse:
        """
        Complete using Anthropic API
        """
        if self.anthropic_client is None:
            raise ValueError("Anthropic not available. Install with: pip install anthropic")

        start_time     = time.time()
        model          = model or settings.ANTHROPIC_MODEL

        log_info("Calling Anthropic API", model = model)

        message        = self.anthropic_client.messages.create(model       = model,
                                                               max_tokens  = max_tokens,
                                                               temperature = temperature,
                                                               system      = system_prompt or "",
                                                               messages    = [{"role": "user", "content": prompt}],
                                                              )

        generated_text = message.content[0].text
        tokens_used    = message.usage.input_tokens + message.usage.output_tokens
        latency        = time.time() - start_time

        log_info("Anthropic completion successful", model = model, tokens_used = tokens_used, latency_seconds = round(latency, 3))

        return LLMResponse(text            = generated_text,
                           provider        = "anthropic",
                           model           = model,
                           tokens_used     = tokens_used,
                           latency_seconds = latency,
                           success         = True,
                           raw_response    = message.model_dump(),
                          )
