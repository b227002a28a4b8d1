# default_styles.py
#
# Default style library for bar states. Highlight events carry one of the
# elementStyles keys as their `kind`; display collaborators look colors up here.

DEFAULT_STYLES = {

  "elementStyles": {
    "idle":             {"fill": "#40E0D0", "stroke": "#424242", "strokeWidth": 0.5},
    "compare":          {"fill": "#FF0000", "stroke": "#B71C1C", "strokeWidth": 1},
    "sorted":           {"fill": "#7E57C2", "stroke": "#4527A0", "strokeWidth": 0.5},
  },

  "canvas": {
    "background": "#FFFFFF",
    "text": "#212121"
  },

  "sound": {
    "min_frequency": 200.0,
    "max_frequency": 1200.0
  }
}

# Applied on top of DEFAULT_STYLES when the dark theme toggle is on
DARK_THEME_OVERRIDES = {
  "elementStyles": {
    "idle":     {"fill": "#26A69A", "stroke": "#E0E0E0"},
    "sorted":   {"fill": "#B39DDB", "stroke": "#EDE7F6"},
  },
  "canvas": {
    "background": "#121212",
    "text": "#EEEEEE"
  }
}
