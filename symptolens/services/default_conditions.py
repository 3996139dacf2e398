"""
Built-in reference conditions.

Served by the condition repository whenever the configured condition store
is unreachable or returns nothing usable.
"""

from symptolens.schemas.conditions import MedicalCondition


# ============================================================================
# DEFAULT CONDITION RECORDS
# ============================================================================

DEFAULT_CONDITION_RECORDS = [
    {
        "name": "Influenza",
        "description": "A viral infection that attacks the respiratory system (nose, throat and lungs). Commonly called the flu, it is more severe than the common cold and can lead to complications.",
        "symptoms": ["fever", "cough", "sore throat", "body aches", "fatigue", "chills", "headache"],
        "visual_cues": [],
        "urgency": "medium",
        "recommendation": "Rest, stay hydrated and take over-the-counter pain relievers. Seek care if breathing becomes difficult or fever persists beyond three days.",
        "body_locations": ["general", "chest", "head", "throat"],
        "learn_more_url": "https://www.mayoclinic.org/diseases-conditions/flu/symptoms-causes/syc-20351719",
        "symptom_relationships": {
            "required": ["fever", "fatigue"],
            "commonly_together": ["fever", "body aches", "chills"],
            "rarely_together": ["fever", "no respiratory symptoms"]
        }
    },
    {
        "name": "Common Cold",
        "description": "A viral infection of the nose and throat (upper respiratory tract). Usually harmless and resolves on its own within 7-10 days.",
        "symptoms": ["runny nose", "sore throat", "cough", "congestion", "sneezing"],
        "visual_cues": [],
        "urgency": "low",
        "recommendation": "Rest, stay hydrated, and use over-the-counter remedies for symptom relief. Symptoms usually resolve within a week or two.",
        "body_locations": ["head", "throat"],
        "learn_more_url": "https://www.mayoclinic.org/diseases-conditions/common-cold/symptoms-causes/syc-20351605"
    },
    {
        "name": "Migraine",
        "description": "A neurological condition causing severe headaches, often with visual disturbances, nausea and sensitivity to light.",
        "symptoms": ["severe headache", "nausea", "light sensitivity", "vision changes", "dizziness"],
        "visual_cues": ["facial pallor", "squinting"],
        "urgency": "medium",
        "recommendation": "Rest in a dark, quiet room and take prescribed medication. See a doctor if headaches are new, sudden or worsening.",
        "body_locations": ["head"],
        "learn_more_url": "https://www.mayoclinic.org/diseases-conditions/migraine-headache/symptoms-causes/syc-20360201",
        "symptom_relationships": {
            "required": ["severe headache"],
            "commonly_together": ["light sensitivity", "nausea"],
            "rarely_together": ["severe headache", "no sensitivity symptoms"]
        }
    },
    {
        "name": "Tension Headache",
        "description": "The most common type of headache, causing mild to moderate pain often described as a tight band around the head.",
        "symptoms": ["headache", "pressure around head", "neck tightness", "scalp tenderness"],
        "visual_cues": [],
        "urgency": "low",
        "recommendation": "Manage stress, rest and use over-the-counter pain relievers as directed.",
        "body_locations": ["head", "neck"],
        "learn_more_url": "https://www.mayoclinic.org/diseases-conditions/tension-headache/symptoms-causes/syc-20353977"
    },
    {
        "name": "Bronchitis",
        "description": "Inflammation of the bronchial tubes that carry air to and from the lungs.",
        "symptoms": ["persistent cough", "chest congestion", "fatigue", "mild fever", "shortness of breath"],
        "visual_cues": [],
        "urgency": "medium",
        "recommendation": "Rest, use a humidifier and stay hydrated. See a doctor if the cough lasts more than three weeks.",
        "body_locations": ["chest"],
        "symptom_relationships": {
            "required": ["persistent cough"],
            "commonly_together": ["chest congestion", "shortness of breath"],
            "rarely_together": ["persistent cough", "no respiratory symptoms"]
        }
    },
    {
        "name": "Pneumonia",
        "description": "An infection that inflames the air sacs in one or both lungs, which may fill with fluid.",
        "symptoms": ["cough", "fever", "shortness of breath", "chest pain", "chills", "fatigue"],
        "visual_cues": ["bluish lips"],
        "urgency": "high",
        "recommendation": "Seek medical evaluation promptly, especially with high fever or difficulty breathing.",
        "body_locations": ["chest"],
        "learn_more_url": "https://www.mayoclinic.org/diseases-conditions/pneumonia/symptoms-causes/syc-20354204",
        "symptom_relationships": {
            "required": ["cough"],
            "commonly_together": ["fever", "shortness of breath"]
        }
    },
    {
        "name": "Skin Allergy",
        "description": "A skin reaction to an allergen, causing a rash or other symptoms.",
        "symptoms": ["rash", "itchiness", "redness", "swelling", "bumps", "blisters"],
        "visual_cues": ["hives", "contact dermatitis rash", "localized redness", "swelling"],
        "urgency": "low-medium",
        "recommendation": "Avoid the allergen. Use antihistamines or topical creams. See a doctor for persistent or severe reactions.",
        "body_locations": ["skin"]
    },
    {
        "name": "Contact Dermatitis",
        "description": "An inflammatory skin condition caused by contact with irritants or allergens, with red, itchy skin and possible bumps or blisters.",
        "symptoms": ["skin rash", "itching", "redness", "bumps", "blisters", "skin tenderness"],
        "visual_cues": ["red patches", "blistering"],
        "urgency": "low",
        "recommendation": "Identify and avoid the irritant, wash the area with mild soap and apply a soothing cream.",
        "body_locations": ["skin"],
        "learn_more_url": "https://www.mayoclinic.org/diseases-conditions/contact-dermatitis/symptoms-causes/syc-20352742"
    },
    {
        "name": "Eczema",
        "description": "A chronic skin condition (atopic dermatitis) with itchy, inflamed skin that often worsens at night.",
        "symptoms": ["itchy skin", "redness", "dry skin", "scaly patches", "skin inflammation", "crusting"],
        "visual_cues": ["dry scaly patches", "thickened skin"],
        "urgency": "low",
        "recommendation": "Moisturize regularly, avoid harsh soaps and known triggers. See a dermatologist for flare-ups that do not settle.",
        "body_locations": ["skin"],
        "learn_more_url": "https://www.mayoclinic.org/diseases-conditions/atopic-dermatitis-eczema/symptoms-causes/syc-20353273"
    },
    {
        "name": "Lyme Disease",
        "description": "A tick-borne bacterial infection that often begins with a spreading rash, followed by flu-like symptoms and joint pain.",
        "symptoms": ["rash", "fever", "fatigue", "headache", "joint pain", "chills"],
        "visual_cues": ["bullseye rash", "erythema migrans"],
        "urgency": "medium",
        "recommendation": "See a healthcare provider promptly after a tick bite with rash or fever; early antibiotic treatment is effective.",
        "body_locations": ["skin", "joints"],
        "symptom_relationships": {
            "commonly_together": ["rash", "fever"]
        }
    },
    {
        "name": "Gastroenteritis",
        "description": "Often called stomach flu, an intestinal infection marked by diarrhea, abdominal cramps, nausea, vomiting and sometimes fever.",
        "symptoms": ["diarrhea", "abdominal cramps", "nausea", "vomiting", "low-grade fever", "muscle aches"],
        "visual_cues": [],
        "urgency": "medium",
        "recommendation": "Sip clear fluids to stay hydrated and rest. Seek care if unable to keep fluids down or signs of dehydration appear.",
        "body_locations": ["abdomen"],
        "learn_more_url": "https://www.mayoclinic.org/diseases-conditions/viral-gastroenteritis/symptoms-causes/syc-20378847"
    },
    {
        "name": "Appendicitis",
        "description": "Inflammation of the appendix, typically causing pain that starts near the navel and moves to the lower right abdomen.",
        "symptoms": ["abdominal pain", "nausea", "vomiting", "fever", "loss of appetite"],
        "visual_cues": [],
        "urgency": "high",
        "recommendation": "Seek emergency medical care. Do not eat, drink or take pain relievers until evaluated.",
        "body_locations": ["abdomen"],
        "symptom_relationships": {
            "required": ["abdominal pain"]
        }
    },
    {
        "name": "Sinusitis",
        "description": "Inflammation of the sinuses, often from a viral or bacterial infection, causing facial pain, pressure and nasal congestion.",
        "symptoms": ["facial pain", "nasal congestion", "thick nasal discharge", "post-nasal drip", "headache", "reduced sense of smell"],
        "visual_cues": [],
        "urgency": "low",
        "recommendation": "Use saline nasal rinses, stay hydrated and rest. See a doctor if symptoms last more than ten days.",
        "body_locations": ["head"],
        "learn_more_url": "https://www.mayoclinic.org/diseases-conditions/acute-sinusitis/symptoms-causes/syc-20351671"
    },
    {
        "name": "Sprained Ankle",
        "description": "An injury from rolling or twisting the ankle, stretching or tearing the supporting ligaments.",
        "symptoms": ["ankle pain", "swelling", "bruising", "limited mobility", "tenderness", "instability"],
        "visual_cues": ["bruising", "swelling"],
        "urgency": "low",
        "recommendation": "Rest, ice, compress and elevate the ankle. Seek care if you cannot bear weight.",
        "body_locations": ["legs"],
        "learn_more_url": "https://www.mayoclinic.org/diseases-conditions/sprained-ankle/symptoms-causes/syc-20353225"
    },
    {
        "name": "Conjunctivitis",
        "description": "Also known as pink eye, inflammation or infection of the membrane lining the eyelid and covering the white of the eye.",
        "symptoms": ["red eye", "eye discharge", "itching", "burning", "gritty feeling", "increased tearing"],
        "visual_cues": ["pink eye", "eye redness"],
        "urgency": "low",
        "recommendation": "Avoid touching the eyes, use clean cloths and cool compresses. See a doctor if vision is affected.",
        "body_locations": ["eyes"],
        "learn_more_url": "https://www.mayoclinic.org/diseases-conditions/pink-eye/symptoms-causes/syc-20376355"
    },
]


def default_conditions() -> list[MedicalCondition]:
    """Validated built-in conditions, in declaration order."""
    return [MedicalCondition.model_validate(record) for record in DEFAULT_CONDITION_RECORDS]
