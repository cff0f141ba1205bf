"""Prompt construction for influencer / brand analysis."""

from __future__ import annotations

from app.models.post import Post

SYSTEM_PROMPT = (
    "You are an expert brand strategist and marketing analyst specializing in "
    "influencer marketing.\n\n"
    "Your role is to analyze influencer content and provide comprehensive "
    "insights about brand sentiment, alignment, and marketing effectiveness.\n\n"
    "You must respond with valid JSON format only. Be objective, data-driven, "
    "and provide actionable insights for marketing executives.\n\n"
    "Focus on:\n"
    "- Brand sentiment and perception\n"
    "- Content authenticity and alignment\n"
    "- Engagement quality and patterns\n"
    "- Marketing effectiveness\n"
    "- Risk assessment\n"
    "- Strategic recommendations"
)

OUTPUT_SCHEMA = """{
  "overallSentiment": "Positive" | "Neutral" | "Negative",
  "sentimentScore": 0-100,
  "brandAlignment": "Highly Aligned" | "Aligned" | "Partially Aligned" | "Not Aligned",
  "topKeywords": ["keyword1", "keyword2", "keyword3", "keyword4", "keyword5"],
  "aiQuote": "One insightful sentence about the influencer's impact on the brand (max 150 characters)",
  "contentAnalysis": [
    {
      "postIndex": 1,
      "sentiment": "Positive" | "Neutral" | "Negative",
      "aiComment": "Brief analysis of this specific post (max 100 characters)",
      "brandMention": true | false
    }
  ],
  "recommendations": ["recommendation1", "recommendation2", "recommendation3"],
  "riskFactors": ["risk1", "risk2"] or [],
  "opportunities": ["opportunity1", "opportunity2"],
  "engagementInsights": "Analysis of engagement patterns and their meaning for the brand"
}"""

GUIDELINES = [
    "Consider brand mention frequency and context",
    "Evaluate tone alignment with brand values",
    "Assess audience engagement quality",
    "Identify potential PR risks or opportunities",
    "Evaluate authenticity of endorsements",
    "Analyze overall brand impact and ROI potential",
    "Consider demographic alignment and reach",
]


def format_post(post: Post, number: int) -> str:
    e = post.engagement
    counts = f"{e.likes} likes, {e.comments} comments"
    if e.shares:
        counts += f", {e.shares} shares"
    if e.views:
        counts += f", {e.views} views"
    hashtags = ", ".join(post.hashtags) or "None"

    return (
        f"POST {number}:\n"
        f'Caption: "{post.caption_text}"\n'
        f"Engagement: {counts}\n"
        f"Platform: {post.platform.value}\n"
        f"Published: {post.published_at.isoformat()}\n"
        f"Hashtags: {hashtags}\n"
    )


def build_analysis_prompt(posts: list[Post], brand: str, influencer: str) -> str:
    """Serialize posts plus the strict JSON output contract into one user prompt.

    Pure function: the same posts, brand and influencer always yield the
    same string. Nothing is truncated here.
    """
    posts_text = "\n\n".join(format_post(p, i + 1) for i, p in enumerate(posts))
    guidelines = "\n".join(f"- {g}" for g in GUIDELINES)

    return (
        f'Analyze the following {len(posts)} posts from influencer "{influencer}" '
        f'in relation to the brand "{brand}".\n\n'
        f"POSTS DATA:\n{posts_text}\n\n"
        f"Provide your analysis in this exact JSON format:\n{OUTPUT_SCHEMA}\n\n"
        f"Analysis Guidelines:\n{guidelines}\n\n"
        "Be specific, actionable, and executive-focused in your insights."
    )
