"""CSS styles for the TUI.

Hides layout and styling decisions from the application logic.
Uses Textual CSS features: nesting, pseudo-classes, variables.

Layout:
- Menu panel on the left (toggleable, overlays content on narrow screens)
- Search bar, draft editor and thought list stacked on the right
- Log panel along the bottom, hidden by default
"""

APP_CSS = """
Screen {
    layout: vertical;
    background: $background;
}

/* ============================================
   Main Area - Menu + Content
   ============================================ */
#main {
    height: 1fr;
}

#content {
    width: 1fr;
    height: 100%;
    padding: 0 1;
}

/* ============================================
   Menu Panel
   ============================================ */
#menu {
    width: 24;
    height: 100%;
    background: $panel;
    border: round $primary 60%;
    border-title-color: $primary;
    border-title-style: bold;
    padding: 0 1;
    display: none;

    &.-open {
        display: block;
    }

    Button {
        width: 100%;
        margin: 0 0 1 0;
    }
}

/* Narrow layout: menu takes the whole width while open */
.-narrow #menu {
    width: 100%;
}

.-narrow.-menu-open #content {
    display: none;
}

/* ============================================
   Search Bar
   ============================================ */
#search-input {
    border: round $secondary 60%;
    display: none;

    &.-active {
        display: block;
    }

    &:focus {
        border: round $secondary;
    }
}

/* ============================================
   Draft Editor
   ============================================ */
#draft-editor {
    height: 8;
    border: round $primary 60%;
    border-title-color: $primary;
    border-title-style: bold;
    border-subtitle-color: $text-muted;
    border-subtitle-align: right;
    background: $panel;

    &:focus {
        border: round $primary;
    }

    &:disabled {
        opacity: 60%;
    }
}

/* ============================================
   Thought List
   ============================================ */
#thoughts {
    height: 1fr;
    background: $panel;
    border: round $primary 40%;
    border-title-color: $primary;
    border-title-style: bold;
    border-subtitle-color: $text-muted;
    border-subtitle-align: right;
    padding: 0 1;
    scrollbar-gutter: stable;
}

.thought {
    height: auto;
    margin: 0 0 1 0;
    padding: 0 1;
    border-left: thick $primary 50%;

    &:hover {
        background: $primary 10%;
    }
}

.thought-time {
    color: $text-muted;
    text-style: italic;
}

.thought-text {
    color: $foreground;
}

.empty-thoughts {
    color: $text-muted;
    text-align: center;
    padding: 1;
}

/* ============================================
   Log Panel
   ============================================ */
#log-panel {
    height: auto;
    min-height: 6;
    max-height: 12;
    background: $panel;
    border: round $warning 60%;
    border-title-color: $warning;
    border-title-style: bold;
    border-subtitle-color: $text-muted;
    border-subtitle-align: right;
    padding: 0 1;
    scrollbar-gutter: stable;
}
"""
