config = require("./config")
greetings = require("greetings")

print(greetings.greet(config.NAME))
