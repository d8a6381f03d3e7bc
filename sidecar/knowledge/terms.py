"""
Medical vocabulary tables used for dictionary-driven extraction.

All terms are lowercase. Multi-word phrases are matched with flexible
whitespace, so "chest pain" also matches "chest   pain".
"""

SYMPTOM_TERMS: tuple[str, ...] = (
    "chest pain", "shortness of breath", "abdominal pain", "headache",
    "fatigue", "nausea", "dizziness", "back pain", "joint pain",
    "cough", "fever", "weight loss", "palpitations", "syncope",
    "dyspnea", "orthopnea", "paroxysmal nocturnal dyspnea", "edema",
    "claudication", "angina", "dysphagia", "hemoptysis", "hematuria",
    "melena", "hematochezia", "jaundice", "pruritus", "rash",
    "night sweats", "chills", "malaise", "anorexia", "polyuria",
    "polydipsia", "polyphagia", "diplopia", "blurred vision",
    "tinnitus", "vertigo", "seizures", "tremor", "weakness",
    "numbness", "tingling", "confusion", "memory loss",
)

CONDITION_TERMS: tuple[str, ...] = (
    "hypertension", "diabetes mellitus type 2", "diabetes mellitus type 1",
    "coronary artery disease", "myocardial infarction", "angina pectoris",
    "congestive heart failure", "atrial fibrillation", "atrial flutter",
    "ventricular tachycardia", "bradycardia", "heart block",
    "chronic obstructive pulmonary disease", "asthma", "pneumonia",
    "pulmonary embolism", "pleural effusion", "pneumothorax",
    "hyperlipidemia", "hypercholesterolemia", "hypertriglyceridemia",
    "chronic kidney disease", "acute kidney injury", "nephrolithiasis",
    "urinary tract infection", "benign prostatic hyperplasia",
    "osteoarthritis", "rheumatoid arthritis", "osteoporosis",
    "fibromyalgia", "gout", "depression", "anxiety", "bipolar disorder",
    "schizophrenia", "dementia", "alzheimer disease", "parkinson disease",
    "epilepsy", "migraine", "tension headache", "stroke",
    "transient ischemic attack", "peripheral artery disease",
    "deep vein thrombosis", "gastroesophageal reflux disease",
    "peptic ulcer disease", "inflammatory bowel disease",
    "irritable bowel syndrome", "hepatitis", "cirrhosis", "pancreatitis",
    "cholecystitis", "cholelithiasis", "diverticulitis", "appendicitis",
    "hernia", "thyroid disorders", "hypothyroidism", "hyperthyroidism",
    "adrenal insufficiency", "cushing syndrome", "obesity",
    "metabolic syndrome", "sleep apnea", "chronic fatigue syndrome",
    "anemia", "thrombocytopenia", "leukopenia", "lymphoma",
    "leukemia", "multiple myeloma", "breast cancer", "lung cancer",
    "colon cancer", "prostate cancer", "skin cancer", "melanoma",
)

MEDICATION_TERMS: tuple[str, ...] = (
    # --- Antihypertensives / diuretics ---
    "lisinopril", "enalapril", "losartan", "valsartan", "amlodipine",
    "nifedipine", "metoprolol", "atenolol", "carvedilol", "propranolol",
    "hydrochlorothiazide", "furosemide", "spironolactone", "chlorthalidone",
    # --- Diabetes ---
    "metformin", "glipizide", "glyburide", "insulin", "pioglitazone",
    "sitagliptin", "empagliflozin", "liraglutide",
    # --- Lipids ---
    "atorvastatin", "simvastatin", "rosuvastatin", "pravastatin", "ezetimibe",
    # --- Antithrombotics ---
    "aspirin", "clopidogrel", "warfarin", "rivaroxaban", "apixaban",
    "heparin", "enoxaparin",
    # --- Gastrointestinal ---
    "omeprazole", "pantoprazole", "ranitidine", "famotidine", "sucralfate",
    # --- Endocrine / steroids ---
    "levothyroxine", "methimazole", "prednisone", "prednisolone",
    "hydrocortisone", "dexamethasone",
    # --- Respiratory ---
    "albuterol", "ipratropium", "tiotropium", "fluticasone",
    "budesonide", "montelukast", "theophylline",
    # --- Antiarrhythmics / antianginals ---
    "digoxin", "amiodarone", "diltiazem", "verapamil", "nitroglycerin",
    "isosorbide",
    # --- Analgesics ---
    "acetaminophen", "ibuprofen", "naproxen", "celecoxib", "tramadol",
    "morphine", "oxycodone", "codeine", "gabapentin", "pregabalin",
    # --- Psychiatric ---
    "amitriptyline", "nortriptyline", "sertraline", "fluoxetine",
    "paroxetine", "citalopram", "escitalopram", "venlafaxine", "duloxetine",
    "bupropion", "trazodone", "mirtazapine", "lorazepam", "alprazolam",
    "clonazepam", "diazepam", "zolpidem", "eszopiclone",
    # --- Neurological ---
    "phenytoin", "carbamazepine", "valproic acid", "levetiracetam",
    "lamotrigine", "topiramate", "levodopa", "carbidopa",
    "donepezil", "memantine", "rivastigmine", "galantamine",
)

PROCEDURE_TERMS: tuple[str, ...] = (
    "electrocardiogram", "ecg", "ekg", "echocardiogram", "stress test",
    "cardiac catheterization", "angiography", "chest x-ray", "ct scan",
    "mri", "ultrasound", "colonoscopy", "endoscopy", "bronchoscopy",
    "biopsy", "blood work", "complete blood count", "basic metabolic panel",
    "comprehensive metabolic panel", "lipid panel", "liver function tests",
    "thyroid function tests", "hemoglobin a1c", "glucose tolerance test",
    "urinalysis", "urine culture", "stool culture", "blood culture",
)

# Vocabulary only; extraction does not scan for specialties.
SPECIALTY_TERMS: tuple[str, ...] = (
    "cardiology", "pulmonology", "gastroenterology", "endocrinology",
    "nephrology", "neurology", "psychiatry", "orthopedics", "urology",
    "dermatology", "ophthalmology", "otolaryngology", "oncology",
    "hematology", "infectious disease", "rheumatology", "geriatrics",
)

DIAGNOSTIC_CODES: dict[str, str] = {
    # --- Cardiovascular ---
    "hypertension": "I10",
    "essential hypertension": "I10",
    "coronary artery disease": "I25.9",
    "myocardial infarction": "I21.9",
    "acute myocardial infarction": "I21.9",
    "congestive heart failure": "I50.9",
    "heart failure": "I50.9",
    "atrial fibrillation": "I48.91",
    "chest pain": "R06.02",
    "angina pectoris": "I20.9",
    # --- Respiratory ---
    "shortness of breath": "R06.00",
    "dyspnea": "R06.00",
    "chronic obstructive pulmonary disease": "J44.9",
    "copd": "J44.9",
    "asthma": "J45.9",
    "pneumonia": "J18.9",
    "cough": "R05",
    # --- Gastrointestinal ---
    "abdominal pain": "R10.9",
    "nausea": "R11.0",
    "vomiting": "R11.10",
    "gastroesophageal reflux disease": "K21.9",
    "gerd": "K21.9",
    "peptic ulcer disease": "K27.9",
    # --- Endocrine ---
    "diabetes mellitus": "E11.9",
    "diabetes mellitus type 2": "E11.9",
    "diabetes mellitus type 1": "E10.9",
    "hypothyroidism": "E03.9",
    "hyperthyroidism": "E05.9",
    "obesity": "E66.9",
    # --- Neurological ---
    "headache": "R51.9",
    "migraine": "G43.909",
    "seizures": "R56.9",
    "epilepsy": "G40.909",
    "stroke": "I63.9",
    "transient ischemic attack": "G93.1",
    "dizziness": "R42",
    "vertigo": "R42",
    # --- Musculoskeletal ---
    "back pain": "M54.9",
    "joint pain": "M25.9",
    "arthralgia": "M25.9",
    "osteoarthritis": "M19.90",
    "rheumatoid arthritis": "M06.9",
    "osteoporosis": "M81.0",
    # --- Psychiatric ---
    "depression": "F32.9",
    "anxiety": "F41.9",
    "bipolar disorder": "F31.9",
    # --- Genitourinary ---
    "urinary tract infection": "N39.0",
    "acute kidney injury": "N17.9",
    "chronic kidney disease": "N18.9",
    # --- Hematologic ---
    "anemia": "D64.9",
    "iron deficiency anemia": "D50.9",
    # --- General symptoms ---
    "fatigue": "R53.83",
    "fever": "R50.9",
    "weight loss": "R63.4",
    "malaise": "R53.1",
    "syncope": "R55",
}
