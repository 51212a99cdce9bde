"""Internal package for the NYSC Extract Streamlit app.

Modules are organized into:
- config: constants, record defaults and PDF templates
- settings / logging: environment-driven configuration and log setup
- models: member, metadata and app-state types
- providers: AI model clients behind a small registry
- services: extraction, record-set operations and CSV/PDF export
- utils: upload decoding, PDF preview, timing
- ui: Streamlit pages and panels
"""
