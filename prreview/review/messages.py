"""Fixed texts posted by the bot and sent to the model."""

PROJECT_URL = "https://github.com/flows-network/github-pr-review/"

# Comments starting with this are never treated as review requests
SELF_PREAMBLE = "Hello, I am a code reviewer"

# Body prefixes that identify the tracked review comment on a PR
BOT_MARKERS = (
    "Hello, I am a [code review agent]",
    "Hello, I am a [code reviewer]",
)

GREETING = (
    f"Hello, I am a [code reviewer]({PROJECT_URL}).\n\n"
    "It could take a few minutes for me to analyze this PR. "
    "Relax, grab some protein shake and complete 10-15 pushups. Thanks!"
)

PREAMBLE = (
    f"Hello, I am a [code reviewer]({PROJECT_URL}). "
    "Here are my reviews of changed source code files in this PR.\n\n------\n\n"
)

SYSTEM_PROMPT_TEMPLATE = (
    "You are an experienced software developer. You will review a source code file "
    'and its patch related to the subject of "{title}". Please be concise and accurate. '
    "Read through all the files mentioned in the PR and generate your responses."
)

REVIEW_INSTRUCTION = (
    "Review the following source code and report any bugs or issues in 50 to 100 words "
    "but please be concise."
)

NOT_AVAILABLE = "N/A"
