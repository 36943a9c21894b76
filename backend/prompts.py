CLEAN_TRANSCRIPT_PROMPT = """Format this video transcript for blog readability while preserving ALL original transcribed content:

FORMATTING REQUIREMENTS:
1. Identify speakers and format as "Speaker Name:"
2. Organize into logical sections with clear headings
3. Remove filler words (um, uh, you know, like, etc.)
4. Fix punctuation, capitalization, and obvious typos
5. Add proper paragraph breaks for readability

CRITICAL: Keep ALL the original transcribed words and content. Do NOT:
- Summarize or paraphrase anything
- Add new words or phrases not in the original
- Change the meaning or flow of what was actually said
- Skip any content from the original transcript

The goal is to make the EXACT transcribed content readable and well-organized, not to rewrite it.

Raw transcript:
{transcript}

Return the cleaned and formatted transcript with proper speaker identification and structure."""

# Literal braces in the JSON example are doubled for str.format
GENERATE_CONTENT_PROMPT = """Based on this clean, formatted video transcript, generate the following content in JSON format:

1. SEO-optimized title (60 characters max)
2. Meta description (150 characters max)
3. 5 FAQs with proper HTML schema markup
4. 4 key takeaways that are SEO-focused

Clean Transcript: {transcript}

Video Title Context: {video_title}

Return ONLY a valid JSON object with this structure:
{{
  "seoTitle": "string",
  "metaDescription": "string",
  "faqs": [
    {{
      "question": "string",
      "answer": "string"
    }}
  ],
  "keyTakeaways": [
    "string"
  ],
  "schemaMarkup": "string containing HTML FAQ section with schema.org microdata"
}}

IMPORTANT: The schemaMarkup field must be HTML FAQ section with microdata like:
<div itemscope itemtype="https://schema.org/FAQPage">
  <div itemscope itemprop="mainEntity" itemtype="https://schema.org/Question">
    <h3 itemprop="name">Question here?</h3>
    <div itemscope itemprop="acceptedAnswer" itemtype="https://schema.org/Answer">
      <p itemprop="text">Answer here</p>
    </div>
  </div>
</div>

DO NOT OUTPUT ANYTHING OTHER THAN VALID JSON."""

DEFAULT_VIDEO_TITLE = "Video content"


def build_clean_prompt(transcript: str) -> str:
    return CLEAN_TRANSCRIPT_PROMPT.format(transcript=transcript)


def build_generate_prompt(transcript: str, video_title: str | None = None) -> str:
    return GENERATE_CONTENT_PROMPT.format(
        transcript=transcript,
        video_title=video_title or DEFAULT_VIDEO_TITLE,
    )
