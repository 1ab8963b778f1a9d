"""Built-in content used when the JSON data files are missing or malformed."""

DEFAULT_TOPICS = {
    "password_safety": {
        "name": "Password Safety",
        "keywords": ["password", "passcode", "login", "credentials", "passwords"],
        "responses": [
            "Always use strong, unique passwords for each account. A strong password should be at least "
            "12 characters long, include a mix of uppercase letters, lowercase letters, numbers, and symbols, "
            "and avoid personal information like your name or birthdate. For example, instead of 'John123', "
            "use something like 'Tr0ub4dor&3xplor3r'. Consider using a password manager to generate and store "
            "complex passwords securely.",
            "Make sure your passwords are complex and unique for every account. Aim for at least 12 characters "
            "with a combination of letters, numbers, and symbols, like 'P@ssw0rd#2025'. Avoid using easily "
            "guessable info, such as your birthday, and never reuse passwords. If one account is hacked, "
            "others could be at risk too.",
            "Create strong passwords by using a mix of characters (uppercase, lowercase, numbers, and symbols) "
            "and make them at least 12 characters long. For instance, 'G7m!x9qL$2vP' is a good example. Don't "
            "use the same password across multiple sites, and consider a password manager to keep track of "
            "them securely.",
        ],
    },
    "phishing_scams": {
        "name": "Phishing and Scams",
        "keywords": ["scam", "phishing", "fraud", "hoax", "scamming"],
        "responses": [
            "Be cautious of emails asking for personal information. Scammers often disguise themselves as "
            "trusted organizations. For example, you might get an email saying your account is locked and "
            "asking you to click a link. Don't! Always verify the sender's email address and contact the "
            "organization directly if unsure.",
            "Phishing scams trick you into sharing sensitive info, like passwords, by posing as legitimate "
            "sources. For instance, a fake email might claim you've won a prize and ask for your bank details. "
            "Never click links in unsolicited messages, and double-check the sender's email for typos, like "
            "'support@yourbannk.com'.",
            "Scammers often use phishing to steal your data through fake emails or texts. An example is a "
            "message claiming your account needs 'urgent verification' with a link to a fake login page. "
            "Always hover over links to check the URL before clicking, and avoid sharing personal info with "
            "unknown contacts.",
        ],
    },
    "safe_browsing_privacy": {
        "name": "Safe Browsing and Privacy",
        "keywords": ["privacy", "security", "browsing", "data", "private", "2fa", "two-factor"],
        "responses": [
            "Protecting your privacy online starts with safe browsing habits. Always check that websites use "
            "HTTPS (look for the padlock icon in the browser), which ensures your data is encrypted. For "
            "example, 'https://www.example.com' is safer than 'http://example.com'. Be cautious about sharing "
            "personal information and avoid posting sensitive details like your address or phone number on "
            "social media.",
            "Keep your online activity private by ensuring websites use HTTPS. Check for the padlock in your "
            "browser. For instance, 'https://www.google.com' is secure, but 'http://' isn't. Use privacy "
            "settings on social media to limit who can see your posts, and enable two-factor authentication "
            "(2FA) for extra security.",
            "Stay safe online by browsing securely. Always use HTTPS websites, which encrypt your data (e.g., "
            "'https://www.example.com'). Don't share personal details like your phone number publicly, and "
            "clear your browser cookies regularly to prevent tracking. Adding 2FA to your accounts also helps "
            "protect your privacy.",
        ],
    },
}

DEFAULT_GENERAL_KNOWLEDGE = {
    "cybersecurity": (
        "Cybersecurity is the practice of protecting computers, servers, mobile devices, electronic systems, "
        "networks, and data from digital attacks, unauthorized access, or damage. It involves a range of "
        "practices, like using strong passwords, enabling two-factor authentication, and keeping software "
        "updated. For example, a company might use firewalls and encryption to secure its data, while "
        "individuals can protect themselves by avoiding suspicious links and using antivirus software."
    ),
    "firewall": (
        "A firewall is a security system that monitors and controls incoming and outgoing network traffic "
        "based on predefined rules. It acts like a barrier between your device and potential threats on the "
        "internet. For instance, a firewall might block unauthorized access to your computer while allowing "
        "safe connections, like accessing a trusted website. Firewalls are essential for both personal "
        "devices and business networks to prevent cyberattacks."
    ),
    "malware": (
        "Malware, short for malicious software, is any program designed to harm or exploit a device, "
        "network, or user. Common types include viruses, worms, ransomware, and spyware. For example, "
        "ransomware can lock your files and demand payment to unlock them, while spyware might secretly "
        "track your activity. To protect yourself, always avoid downloading files from untrusted sources, "
        "keep your antivirus software updated, and be cautious with email attachments."
    ),
}

DEFAULT_QUIZ_QUESTIONS = [
    {
        "question": "What is the minimum recommended length for a strong password?",
        "options": ["6 characters", "8 characters", "12 characters", "16 characters"],
        "correct_answer_index": 2,
        "explanation": "A strong password should be at least 12 characters long to ensure better security, "
                       "as recommended in password safety guidelines.",
    },
    {
        "question": "Which of these is a characteristic of a phishing email?",
        "options": ["It uses HTTPS", "It asks for your password via a link",
                    "It comes from a verified sender", "It has no links"],
        "correct_answer_index": 1,
        "explanation": "Phishing emails often trick users into sharing sensitive information, like "
                       "passwords, by including links to fake login pages.",
    },
    {
        "question": "What does HTTPS indicate on a website?",
        "options": ["The website is free", "The website is popular",
                    "The website encrypts your data", "The website has no ads"],
        "correct_answer_index": 2,
        "explanation": "HTTPS ensures that your data is encrypted, making the website safer for sharing "
                       "personal information.",
    },
    {
        "question": "Why should you avoid reusing passwords across multiple sites?",
        "options": ["It slows down your login", "It makes passwords harder to remember",
                    "A hack on one site risks others", "It reduces password strength"],
        "correct_answer_index": 2,
        "explanation": "Reusing passwords means that if one account is hacked, other accounts using the "
                       "same password are also at risk.",
    },
    {
        "question": "What should you check before clicking a link in an email?",
        "options": ["The email subject", "The sender's email address", "The email's length", "The email's font"],
        "correct_answer_index": 1,
        "explanation": "Always verify the sender's email address to ensure it's legitimate and check the URL "
                       "by hovering over links to avoid phishing scams.",
    },
    {
        "question": "What is a firewall used for?",
        "options": ["Speeding up your internet", "Blocking unauthorized network access",
                    "Storing passwords", "Encrypting emails"],
        "correct_answer_index": 1,
        "explanation": "A firewall monitors and controls network traffic to block unauthorized access, "
                       "protecting your device from threats.",
    },
    {
        "question": "What is a common type of malware?",
        "options": ["Firewall", "Ransomware", "HTTPS", "Password manager"],
        "correct_answer_index": 1,
        "explanation": "Ransomware is a type of malware that locks your files and demands payment to "
                       "unlock them.",
    },
    {
        "question": "What does enabling two-factor authentication (2FA) do?",
        "options": ["Speeds up login", "Adds an extra layer of security", "Changes your password",
                    "Disables cookies"],
        "correct_answer_index": 1,
        "explanation": "Two-factor authentication (2FA) adds an extra layer of security by requiring a "
                       "second form of verification beyond your password.",
    },
    {
        "question": "What should you avoid sharing on social media to protect your privacy?",
        "options": ["Your favorite color", "Your phone number", "Your hobbies", "Your pet's name"],
        "correct_answer_index": 1,
        "explanation": "Avoid sharing sensitive details like your phone number on social media to protect "
                       "your privacy and reduce the risk of identity theft.",
    },
    {
        "question": "What is a good practice to prevent tracking while browsing?",
        "options": ["Using the same browser", "Clearing browser cookies regularly", "Disabling HTTPS",
                    "Sharing your location"],
        "correct_answer_index": 1,
        "explanation": "Clearing browser cookies regularly helps prevent tracking by removing data that "
                       "websites use to monitor your activity.",
    },
]
