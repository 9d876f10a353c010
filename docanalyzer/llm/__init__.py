from docanalyzer.llm.client_base import BaseLlmClient
from docanalyzer.llm.factory import LlmClientFactory
from docanalyzer.llm.invoker import ModelInvoker
from docanalyzer.llm.prompt_builder import PromptBuilder

__all__ = ["BaseLlmClient", "LlmClientFactory", "ModelInvoker", "PromptBuilder"]
