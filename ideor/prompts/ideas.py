"""
Prompt configurations for startup idea suggestions
"""

# Seed idea + segment: plain strings, exact count
SEED_SEGMENT_DEFAULTS = {
    "ideia_semente": "[não fornecido]",
    "segmento": "[não especificado]",
    "quantidade": "3",
}

SEED_SEGMENT_PROMPT = """Você é um gerador de ideias de startups.
Gere exatamente {quantidade} ideias curtas, cada uma com no máximo 400 caracteres.
Baseie-se na ideia semente e na descrição do segmento informadas.
Retorne APENAS JSON com o formato:
{{ "ideas": ["...", "...", "..."] }}
Sem comentários, sem markdown.

IDEIA_SEMENTE: "{ideia_semente}"
SEGMENTO: "{segmento}"
"""

# Segment only: title/subtitle pairs, short results tolerated
SEGMENT_DEFAULTS = {
    "segmento": "[não especificado]",
    "quantidade": "3",
}

SEGMENT_PROMPT = """Você é um gerador de ideias de startups.
Gere {quantidade} ideias de negócio para o segmento descrito abaixo.
Cada ideia deve ter um título com no máximo 6 palavras e um subtítulo de uma frase explicando a proposta.
Retorne APENAS JSON com o formato:
{{ "ideas": [{{ "title": "...", "subtitle": "..." }}] }}
Sem comentários, sem markdown.

SEGMENTO: "{segmento}"
"""
