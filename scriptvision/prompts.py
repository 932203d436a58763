"""
Instruction templates sent to the text model.
"""

PROMPT_REQUEST_TEMPLATE = """System Instruction: You are an expert script analyst and creative director. Your job is to read a script, break it down into key visual moments, and generate safe, detailed prompts for a text-to-image AI.

User Request:
I have a script that needs to be visualized. Please generate a series of image prompts based on it.

**Context & Style:**
{niche_line}- **Visual Style:** {style}

**CRITICAL INSTRUCTIONS:**
1.  **Analyze and Breakdown:** Read the script and divide it into logical scenes or distinct visual moments.
2.  **Generate Prompts:** For each scene, create ONE image prompt. Each prompt MUST be detailed and strictly adhere to the provided **Visual Style** and incorporate the **Topic/Niche** (if provided).
3.  **IMPORTANT SAFETY RULE:** You MUST generate prompts that are safe and appropriate for a general audience. Do not describe or imply violence, explicit situations, or sensitive interactions, especially those involving minors, even if historically accurate. If the script contains such themes, you MUST represent them abstractly or symbolically. Focus on setting, atmosphere, and emotion. For example, to show tension, describe "long, distorted shadows in a dimly lit room" instead of a direct confrontation. Failure to follow this rule will result in an invalid response.
4.  **Output Format:** Your entire response MUST be a valid JSON object with a single key "prompts", which is an array of strings. Each string in the array is a single image prompt. Do not add any commentary, explanations, or markdown formatting around the JSON.

**Example Response:**
{{
  "prompts": [
    "A lone astronaut stands on a desolate red planet, facing a swirling dust storm under a dim sun. Cinematic lighting casts long, dramatic shadows. The style is reminiscent of Denis Villeneuve's 'Dune'.",
    "Extreme close-up on the astronaut's cracked helmet visor. The glass reflects a tiny, distant blue Earth, a stark contrast to the harsh alien landscape. The image is hyperrealistic, with visible dust particles floating in the foreground."
  ]
}}

**SCRIPT TO ANALYZE:**
---
{script}
---
"""

NICHE_LINE_TEMPLATE = "- **Topic/Niche:** {niche}\n"

STYLE_ANALYSIS_INSTRUCTION = (
    "Analyze the artistic style of this image. Describe the style in a concise, "
    "comma-separated list of keywords and phrases suitable for a text-to-image AI. "
    "Focus on elements like lighting, color palette, composition, medium "
    "(e.g., photograph, oil painting), and overall mood. Do not use full sentences. "
    "Example: cinematic, dramatic lighting, high contrast, muted color palette, "
    "photorealistic, shallow depth of field, moody atmosphere."
)

PROMPT_SCHEMA = {
    "type": "object",
    "properties": {
        "prompts": {
            "type": "array",
            "items": {
                "type": "string",
                "description": "A single, descriptive prompt for generating an image based on a scene from the script."
            }
        }
    },
    "required": ["prompts"]
}


def build_prompt_request(script: str, style: str, niche: str = "") -> str:
    """
    Assemble the instruction text for turning a script into image prompts.

    Args:
        script: Script to break into scenes
        style: Visual style every prompt must follow
        niche: Optional topic; omitted from the text when empty

    Returns:
        str: Complete instruction text
    """
    niche_line = NICHE_LINE_TEMPLATE.format(niche=niche) if niche else ""
    return PROMPT_REQUEST_TEMPLATE.format(niche_line=niche_line, style=style, script=script)
