# hookradar/frameworks/claude.py
"""
Claude Code hook framework

Input: the hook event JSON on stdin (must carry `hook_event_name`).
Output: the hook response JSON. A block sets `decision`, `reason` and
`systemMessage`; `continue` is always the inverse of the block flag.
"""
import json

from hookradar.core.exceptions import HookInputError
from hookradar.frameworks.base import HookFramework, HookHandler
from hookradar.schemas.decision import Decision
from hookradar.schemas.finding import ScanContent
from hookradar.schemas.hook import HookInput

FRAMEWORK_NAME = "claude"
USER_PROMPT_SUBMIT = "UserPromptSubmit"


class UserPromptSubmitHandler(HookHandler):
    """Scans the prompt text of a UserPromptSubmit event"""

    hook_type = USER_PROMPT_SUBMIT

    def can_handle(self, hook_input: HookInput) -> bool:
        return hook_input.framework == FRAMEWORK_NAME and hook_input.hook_type == self.hook_type

    async def extract_content(self, hook_input: HookInput) -> ScanContent:
        data = hook_input.raw_data
        prompt = data.get("prompt", "")
        if not isinstance(prompt, str):
            raise HookInputError("UserPromptSubmit prompt must be a string")

        return ScanContent(
            type="text",
            content=prompt,
            metadata={
                "session_id": str(data.get("session_id", "")),
                "transcript_path": str(data.get("transcript_path", "")),
                "cwd": str(data.get("cwd", "")),
            },
        )


class ClaudeFramework(HookFramework):
    name = FRAMEWORK_NAME

    def __init__(self):
        super().__init__()
        self.register_handler(UserPromptSubmitHandler())

    def parse_input(self, raw: str) -> HookInput:
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            raise HookInputError(f"failed to decode JSON input; {e}") from e

        if not isinstance(data, dict):
            raise HookInputError("hook input must be a JSON object")

        hook_event_name = data.get("hook_event_name")
        if not isinstance(hook_event_name, str) or not hook_event_name:
            raise HookInputError("missing or invalid hook_event_name")

        return HookInput(framework=FRAMEWORK_NAME, hook_type=hook_event_name, raw_data=data)

    def format_output(self, decision: Decision, hook_input: HookInput) -> str:
        output = {
            "continue": not decision.block,
            "suppressOutput": False,
        }

        if decision.block:
            output["decision"] = "block"
            output["reason"] = decision.reason
            output["systemMessage"] = decision.reason

        hook_event_name = hook_input.raw_data.get("hook_event_name")
        if isinstance(hook_event_name, str):
            output["hookSpecificOutput"] = {"hookEventName": hook_event_name}

        return json.dumps(output, ensure_ascii=False)

    def get_exit_code(self, decision: Decision) -> int:
        # The block travels in the JSON envelope, which Claude Code only reads on exit 0
        return 0
