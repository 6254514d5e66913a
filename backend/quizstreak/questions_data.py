# Starter bank loaded into an empty database
QUESTIONS_DATA = [
	{"topic": "HTML", "text": "What is HTML and what is it used for in a web page?"},
	{"topic": "HTML", "text": "What is the difference between a block element and an inline element? Give one example of each."},
	{"topic": "HTML", "text": "What are semantic tags such as <header>, <nav> and <footer> for?"},
	{"topic": "HTML", "text": "What is the purpose of the alt attribute on an <img> tag?"},
	{"topic": "HTML", "text": "How do you create a link that opens in a new tab?"},
	{"topic": "HTML", "text": "What is a form in HTML and what do the action and method attributes do?"},
	{"topic": "CSS", "text": "What is CSS and why is it kept separate from HTML?"},
	{"topic": "CSS", "text": "Explain the box model: content, padding, border and margin."},
	{"topic": "CSS", "text": "What is the difference between a class selector and an id selector?"},
	{"topic": "CSS", "text": "What does display: flex do to a container and its children?"},
	{"topic": "CSS", "text": "What is a media query and when would you use one?"},
	{"topic": "CSS", "text": "How does specificity decide which CSS rule wins?"},
	{"topic": "JavaScript", "text": "What is the difference between let, const and var?"},
	{"topic": "JavaScript", "text": "What is the DOM and how can JavaScript change a page through it?"},
	{"topic": "JavaScript", "text": "What is an event listener? Give an example of reacting to a button click."},
	{"topic": "JavaScript", "text": "What is the difference between == and ===?"},
	{"topic": "JavaScript", "text": "What does fetch() do and why does it return a Promise?"},
	{"topic": "Web", "text": "What happens, in broad terms, when you type a URL into the browser and press Enter?"},
	{"topic": "Web", "text": "What is the difference between the GET and POST HTTP methods?"},
	{"topic": "Web", "text": "What does it mean for a website to be responsive?"},
]
