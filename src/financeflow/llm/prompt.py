"""Prompt rendering for budget optimization."""
from .models import OptimizationRequest

PROMPT_INTRO = (
    "You are a financial advisor. Analyze the user's past spending and financial goals "
    "to suggest an optimized budget allocation across different categories."
)

PROMPT_INSTRUCTIONS = (
    "Based on this information, suggest a budget allocation for each category. "
    "The total of all categories should not exceed the user's income. "
    "Return ONLY a valid JSON object where the keys are the spending categories and the values "
    "are the suggested budget amounts as numbers.\n"
    "Do not include any explanations or markdown formatting, just the JSON object."
)


def format_amount(amount: float) -> str:
    """Render an amount the way it reads as a number: 300, 12.5."""
    value = float(amount)
    if value.is_integer():
        return str(int(value))
    return repr(value)


def render_prompt(request: OptimizationRequest) -> str:
    """Render the optimization prompt. Same request, same prompt."""
    spending_lines = "\n".join(
        f"{category}: ${format_amount(amount)}"
        for category, amount in request.spending.items()
    )

    return f"""{PROMPT_INTRO}

Past Spending:
{spending_lines}

Financial Goals: {request.goals}

{PROMPT_INSTRUCTIONS}
"""
