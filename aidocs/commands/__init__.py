"""The init, push, pull and clean commands of ai-docs."""