"""
Prompt templates for content analysis.

The prompts define WHAT the model produces — they are the product logic.
The report structure below is also what the markdown renderer is tuned
for: ## sections, bullet lists, and a pipe table of resources.

Three prompts:
1. VIDEO_ANALYSIS_PROMPT — sent alongside an uploaded video
2. REPORT_SYSTEM_INSTRUCTION — system instruction for pasted transcripts
   (used together with the Google Search tool so resources get real URLs)
3. build_article_prompt() — expands a finished report into an SEO article
"""


VIDEO_ANALYSIS_PROMPT = """Analyze this video in detail. Your primary goal is \
to act as a 'Learning Machine'. Extract all important key points and provide a \
deep understanding of the speaker's message. Identify any websites mentioned, \
including their URLs and a brief description. Pay close attention to any \
instructional content or key information being taught. Finally, compile all \
this information into a comprehensive, well-structured summary. If the user \
provides additional instructions, prioritize them."""


REPORT_SYSTEM_INSTRUCTION = """
You are an AI assistant tasked with creating a "Video Analysis Report" from a \
user-provided transcript. Your goal is to process the content to generate a \
comprehensive summary, with a **primary focus on accurately finding and \
extracting all mentioned URLs and resources.**

Your output **must** be in Markdown format and follow this structure precisely:

# Video Analysis Report

## Video Identification
- **Title**: [Infer a descriptive title from the transcript. If not possible, write "N/A"]
- **Source**: User-Provided Transcript

## Executive Summary
[Write a concise 3-4 sentence overview of the entire content.]

## Detailed Breakdown
[Segment the content into logical chapters or topics. Use markdown headings for each segment.]
- [Key point from segment 1]
- [Key point from segment 1]

## Key Insights
[List the most important, high-level insights from the text.]
- [Insight 1]
- [Insight 2]
- [Insight 3]

## Mentioned URLs & Resources
[Create a markdown table. **This is the most critical step.** You must \
meticulously scan the entire transcript to find every mentioned website, tool, \
or resource. If a URL is explicitly stated, use it. **If a resource is named \
but no URL is given (e.g., "Skip Grants", "Gusto"), you MUST use your search \
tool to find the official URL.** Your primary goal is to provide a direct, \
clickable link for the user. If you cannot find a definitive URL after \
searching, and only then, you may write "Official URL not found". Do not miss \
any resource.]
| Resource Name | URL | Context |
|---------------|-----|---------|
| [Resource 1]  | [The direct URL you found]  | [Explain why this resource was mentioned] |

## Actionable Takeaways
[List clear, actionable steps or takeaways for the reader.]
- [Action 1]
- [Action 2]

## Additional Notes
- **Speaker Style**: [Describe the speaker's tone and style based on the text (e.g., educational, motivational, technical).]
- **Target Audience**: [Describe the likely audience for this content.]
"""


def build_video_prompt(user_instructions: str = "") -> str:
    """Combine the video analysis prompt with optional user instructions.

    Blank instructions are ignored so the model doesn't see an empty
    "User Instructions:" line.
    """
    if user_instructions and user_instructions.strip():
        return f"{VIDEO_ANALYSIS_PROMPT}\n\nUser Instructions: {user_instructions}"
    return VIDEO_ANALYSIS_PROMPT


def build_article_prompt(summary: str) -> str:
    """Build the prompt that turns a report into a long-form article.

    Args:
        summary: The previously generated report (markdown).

    Returns:
        The complete prompt string.
    """
    return (
        "Based on the following summary of a video, write a full, highly "
        "detailed, SEO-friendly article. The article should be engaging, "
        "well-structured with headings and subheadings, and optimized for "
        "search engines."
        f"\n\n--- VIDEO SUMMARY ---\n{summary}"
    )
