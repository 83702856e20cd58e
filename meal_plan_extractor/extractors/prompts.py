"""
Prompts for recipe enrichment.
"""

ENRICHMENT_PROMPT = """
Write the complete recipe for the dish "{title}".

Provide:
1. ALL ingredients with quantities and units, one ingredient per entry
   (e.g. "2 cups rolled oats", "1 tbsp olive oil", "Salt and pepper to taste")
2. The cooking instructions as ordered steps, one step per entry
   - Each step should be specific about times, temperatures and techniques
   - Do NOT number the steps, the order of the entries is the order of the steps

CRITICAL RULES:
- Keep the dish as named, do not substitute a different recipe
- Do not add commentary, headings or Markdown formatting
- Return ONLY the JSON object below, nothing before or after it

{{
  "ingredients": ["ingredient 1", "ingredient 2"],
  "instructions": ["step 1", "step 2"]
}}
"""


def build_enrichment_prompt(title: str) -> str:
    """Fill the enrichment prompt template for a dish."""
    return ENRICHMENT_PROMPT.format(title=title.strip())
