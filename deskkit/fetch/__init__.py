"""Terminal system summary: data collection and the command-line front end."""