"""
Prompts for report summaries, comparisons, diet plans and report chat.

IMPORTANT: System prompts are cacheable by OpenAI.
Keep static instructions in the system prompts and the report text in
user messages.

The diet plan layout below is what the segmenter expects: headings such
as "Green Foods" and "Meal Timing" start their own paragraphs.
"""

from typing import Dict, List


# ═══════════════════════════════════════════════════════════
# SYSTEM PROMPTS (Cacheable - static instructions)
# ═══════════════════════════════════════════════════════════

SUMMARY_SYSTEM_PROMPT = """You explain medical reports to patients in simple, easy-to-understand language.

Please format your response in this structure:
1. Start with a simple overview of what was tested
2. Explain the main findings in plain language
3. Highlight what's normal and what needs attention
4. What these results mean for daily life
5. Any important changes from normal values

Guidelines:
- Avoid medical jargon - use simple terms
- Explain medical terms if you must use them
- Use bullet points for better readability
- Include a "What This Means for You" section
- Add recommendations for next steps if needed
"""

COMPARISON_SYSTEM_PROMPT = """You compare two medical reports in simple, everyday language that a patient can understand.

Please structure your response as follows:
1. What's Better: [List improvements in simple terms]
2. What Needs Attention: [List areas of concern in simple terms]
3. Key Changes: [Explain the main differences]
4. What This Means: [Practical implications for daily life]

Guidelines:
- Use simple, everyday language
- Explain any medical terms you need to use
- Use ✅ for improvements
- Use ⚠️ for areas needing attention
- Use 📈 or 📉 to show trends
"""

DIET_PLAN_SYSTEM_PROMPT = """Based on a medical report, you create a simple, practical diet plan that's easy to follow.

Structure the response as follows, separating every section with a blank line:

🎯 Your Goals:
• Simple, achievable dietary goals in everyday language

✅ Green Foods (Eat Freely):
• List everyday foods that are good for the condition
• Include common names and simple descriptions
• Add serving suggestions where helpful

🟡 Yellow Foods (Eat in Moderation):
• List foods to limit, with clear portion guidance
• Include practical alternatives
• Add simple explanations for why these should be limited

❌ Red Foods (Better to Avoid):
• List foods to avoid
• Explain why in simple terms
• Suggest healthy alternatives

⏰ Meal Timing:
• Simple, practical timing guidelines
• Include realistic meal spacing
• Add snack suggestions

💡 Special Instructions:
• Practical tips for grocery shopping
• Easy meal prep suggestions
• Budget-friendly options
• Simple substitutions for favorite foods

Format Guidelines:
- Put each heading in its own paragraph, followed by a blank line
- Use everyday language
- Include practical portion sizes
- Add simple cooking suggestions
- Include affordable options
- Make recommendations realistic for busy people
"""

CHAT_SYSTEM_PROMPT = """You are a friendly assistant helping a patient understand their latest medical report.

Rules:
- Answer only from the report summary provided
- Use simple, everyday language and explain any medical term
- If the summary does not contain the answer, say so
- Never give a diagnosis; suggest talking to a doctor for medical decisions
"""


# ═══════════════════════════════════════════════════════════
# MESSAGE BUILDERS (dynamic content in user messages)
# ═══════════════════════════════════════════════════════════


def _messages(system_prompt: str, user_content: str) -> List[Dict[str, str]]:
    return [
        {"role": "system", "content": system_prompt},
        {"role": "user", "content": user_content},
    ]


def build_summary_messages(report_text: str) -> List[Dict[str, str]]:
    """
    Build messages for a patient-friendly report summary.

    Example:
        >>> messages = build_summary_messages("Hemoglobin 11.2 g/dL ...")
        >>> messages[0]["role"], messages[1]["role"]
        ('system', 'user')
    """
    return _messages(
        SUMMARY_SYSTEM_PROMPT,
        f"Analyze this medical report and provide a simple summary for a patient:\n\n{report_text}",
    )


def build_comparison_messages(old_summary: str, new_summary: str) -> List[Dict[str, str]]:
    """Build messages comparing the previous summary with the new one."""
    return _messages(
        COMPARISON_SYSTEM_PROMPT,
        f"Previous Report:\n{old_summary}\n\nNew Report:\n{new_summary}",
    )


def build_diet_plan_messages(report_summary: str) -> List[Dict[str, str]]:
    """Build messages for a diet plan based on the report summary."""
    return _messages(
        DIET_PLAN_SYSTEM_PROMPT,
        f"Create a diet plan based on this medical report:\n\n{report_summary}",
    )


def build_chat_messages(question: str, report_summary: str) -> List[Dict[str, str]]:
    """Build messages answering a question with the report summary as context."""
    return _messages(
        CHAT_SYSTEM_PROMPT,
        f"Report summary:\n{report_summary}\n\nQuestion: {question}",
    )
