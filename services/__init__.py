"""
Veo Studio Services

- video_generation: input collection, Veo client, generation orchestrator
  and the UI session state machine
"""
