# Mock Restaurant Backend
