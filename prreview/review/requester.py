"""Ask the model to review one file."""

import logging

from prreview.config import LLMConfig
from prreview.llm import ChatOptions, LLMClient, LLMError
from prreview.review.messages import NOT_AVAILABLE, REVIEW_INSTRUCTION, SYSTEM_PROMPT_TEMPLATE

LOG = logging.getLogger("prreview.review.requester")


def build_system_prompt(title: str) -> str:
    return SYSTEM_PROMPT_TEMPLATE.format(title=title)


def build_prompt(content: str) -> str:
    return f"{REVIEW_INSTRUCTION}\n\n{content}"


def build_chat_options(llm_config: LLMConfig, title: str) -> ChatOptions:
    """Options for every file of a PR: restart=True makes each file a
    single-turn exchange."""
    return ChatOptions(
        model=llm_config.model_name,
        token_limit=llm_config.ctx_size,
        restart=True,
        system_prompt=build_system_prompt(title),
    )


def request_review(client: LLMClient, chat_id: str, filename: str, content: str, options: ChatOptions) -> str:
    """Return the model's review of content, or "N/A" if the call fails."""
    LOG.debug("Sending file to LLM: %s", filename)
    try:
        response = client.chat_completion(chat_id, build_prompt(content), options)
    except LLMError as e:
        LOG.error("LLM returns error for file review for %s: %s", filename, e)
        return NOT_AVAILABLE
    LOG.debug("Received LLM response for file: %s", filename)
    return response.choice
