# src/sheetmap/core/__init__.py
"""
Core do SheetMap.

Componentes principais:
    - config     → erros de configuração, documentos de opções, merge e hashing
    - validation → validadores de célula e sua fábrica
    - options    → builder fluente, declarações, default de opcionalidade

Princípios fundamentais:
    - Uma única superfície de mutação para todos os canais de configuração
    - Erros de configuração são imediatos, nunca adiados
    - Nenhuma decisão silenciosa: sobrescritas geram warnings estruturados

Limites explícitos:
    - Não lê planilhas nem converte valores de célula
    - Não executa validadores contra linhas
"""
